from yoyo import step


steps = [
    step(
        """
        CREATE TABLE IF NOT EXISTS groups (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            name VARCHAR(100) NOT NULL,
            slug VARCHAR(100) NOT NULL,
            description TEXT,
            topic VARCHAR(100),
            owner_id VARCHAR(255) NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT clock_timestamp()
        )
        """,
        """
        DROP TABLE IF EXISTS groups
        """
    ),
    step(
        """
        CREATE INDEX IF NOT EXISTS idx_groups_created ON groups(created_at DESC)
        """
    ),
    step(
        """
        CREATE INDEX IF NOT EXISTS idx_groups_slug ON groups(slug)
        """
    )
]
