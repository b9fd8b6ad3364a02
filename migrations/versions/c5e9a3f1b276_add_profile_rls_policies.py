"""add_profile_rls_policies

Revision ID: c5e9a3f1b276
Revises: a1c4e7b2d9f0
Create Date: 2026-09-28 11:02:47.530916

"""

from collections.abc import Sequence

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "c5e9a3f1b276"
down_revision: str | Sequence[str] | None = "a1c4e7b2d9f0"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Add Row Level Security policies for profile tables.

    Note: The FastAPI backend connects with a service account that bypasses
    RLS and filters by owner itself. These policies cover direct Supabase
    client access: anyone may read, only the owner of a profile row writes.
    """
    # --- Helper: profile ids owned by a user, without recursive RLS ---
    op.execute("""
        CREATE OR REPLACE FUNCTION get_owned_profile_ids(uid UUID)
        RETURNS SETOF UUID
        LANGUAGE sql
        SECURITY DEFINER
        STABLE
        SET search_path = public
        AS $$
            SELECT id FROM profiles WHERE owner_id = uid;
        $$;
    """)

    for table in ["profiles", "theme_settings", "links"]:
        op.execute(f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY;")

    # --- Profiles policies ---
    op.execute("""
        CREATE POLICY profiles_select ON profiles
            FOR SELECT USING (true);
    """)
    op.execute("""
        CREATE POLICY profiles_insert ON profiles
            FOR INSERT WITH CHECK (owner_id = (SELECT auth.uid()));
    """)
    op.execute("""
        CREATE POLICY profiles_update ON profiles
            FOR UPDATE USING (owner_id = (SELECT auth.uid()))
            WITH CHECK (owner_id = (SELECT auth.uid()));
    """)

    # --- Theme settings policies ---
    op.execute("""
        CREATE POLICY theme_settings_select ON theme_settings
            FOR SELECT USING (true);
    """)
    op.execute("""
        CREATE POLICY theme_settings_update ON theme_settings
            FOR UPDATE USING (
                profile_id IN (SELECT get_owned_profile_ids((SELECT auth.uid())))
            );
    """)

    # --- Links policies ---
    # SELECT: visitors see active links, owners see all of theirs
    op.execute("""
        CREATE POLICY links_select ON links
            FOR SELECT USING (
                is_active
                OR profile_id IN (SELECT get_owned_profile_ids((SELECT auth.uid())))
            );
    """)
    for action, clause in [
        ("INSERT", "WITH CHECK"),
        ("UPDATE", "USING"),
        ("DELETE", "USING"),
    ]:
        op.execute(f"""
            CREATE POLICY links_{action.lower()} ON links
                FOR {action} {clause} (
                    profile_id IN (SELECT get_owned_profile_ids((SELECT auth.uid())))
                );
        """)


def downgrade() -> None:
    """Remove profile RLS policies."""
    for policy in ["links_delete", "links_update", "links_insert", "links_select"]:
        op.execute(f"DROP POLICY IF EXISTS {policy} ON links;")
    for policy in ["theme_settings_update", "theme_settings_select"]:
        op.execute(f"DROP POLICY IF EXISTS {policy} ON theme_settings;")
    for policy in ["profiles_update", "profiles_insert", "profiles_select"]:
        op.execute(f"DROP POLICY IF EXISTS {policy} ON profiles;")

    for table in ["profiles", "theme_settings", "links"]:
        op.execute(f"ALTER TABLE {table} DISABLE ROW LEVEL SECURITY;")

    op.execute("DROP FUNCTION IF EXISTS get_owned_profile_ids(UUID);")
