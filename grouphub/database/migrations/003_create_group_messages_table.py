from yoyo import step


steps = [
    step(
        """
        CREATE TABLE IF NOT EXISTS group_messages (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            seq BIGINT GENERATED ALWAYS AS IDENTITY,
            group_id UUID NOT NULL REFERENCES groups(id) ON DELETE CASCADE,
            user_id VARCHAR(255) NOT NULL,
            content TEXT NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT clock_timestamp()
        )
        """,
        """
        DROP TABLE IF EXISTS group_messages
        """
    ),
    step(
        """
        CREATE INDEX IF NOT EXISTS idx_group_messages_order ON group_messages(group_id, created_at, seq)
        """
    )
]
