from yoyo import step


steps = [
    step(
        """
        CREATE TABLE IF NOT EXISTS group_members (
            group_id UUID NOT NULL REFERENCES groups(id) ON DELETE CASCADE,
            user_id VARCHAR(255) NOT NULL,
            joined_at TIMESTAMPTZ NOT NULL DEFAULT clock_timestamp(),
            PRIMARY KEY (group_id, user_id)
        )
        """,
        """
        DROP TABLE IF EXISTS group_members
        """
    ),
    step(
        """
        CREATE INDEX IF NOT EXISTS idx_group_members_user ON group_members(user_id, joined_at DESC)
        """
    )
]
