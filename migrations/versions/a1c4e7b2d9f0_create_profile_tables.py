"""create_profile_tables

Revision ID: a1c4e7b2d9f0
Revises:
Create Date: 2026-09-28 10:14:32.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1c4e7b2d9f0'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create profiles, theme_settings and links tables."""
    # One profile per Supabase auth user
    op.create_table('profiles',
        sa.Column('id', sa.UUID(), server_default=sa.text('gen_random_uuid()'), nullable=False),
        sa.Column('owner_id', sa.UUID(), nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('title', sa.String(length=100), nullable=True),
        sa.Column('role', sa.String(length=100), nullable=True),
        sa.Column('company', sa.String(length=100), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('profile_picture_url', sa.String(length=500), nullable=True),
        sa.Column('cover_image_url', sa.String(length=500), nullable=True),
        sa.Column('contact_email', sa.String(length=255), nullable=True),
        sa.Column('contact_phone', sa.String(length=20), nullable=True),
        sa.Column('contact_location', sa.String(length=100), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['owner_id'], ['auth.users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('owner_id', name='uq_profiles_owner_id'),
        sa.UniqueConstraint('username', name='uq_profiles_username'),
        sa.CheckConstraint("length(username) > 0", name='ck_profiles_username_not_empty'),
    )

    op.create_table('theme_settings',
        sa.Column('id', sa.UUID(), server_default=sa.text('gen_random_uuid()'), nullable=False),
        sa.Column('profile_id', sa.UUID(), nullable=False),
        sa.Column('bg_type', sa.String(length=10), server_default='color', nullable=False),
        sa.Column('bg_color', sa.String(length=7), server_default='#210900', nullable=False),
        sa.Column('bg_image_url', sa.String(length=500), nullable=True),
        sa.Column('button_style', sa.String(length=20), server_default='rounded', nullable=False),
        sa.Column('button_bg_color', sa.String(length=7), server_default='#FF6600', nullable=False),
        sa.Column('button_text_color', sa.String(length=7), server_default='#FFFFFF', nullable=False),
        sa.Column('button_shadow', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('font_family', sa.String(length=100), server_default='Space Grotesk', nullable=False),
        sa.Column('text_color', sa.String(length=7), server_default='#FFFFFF', nullable=False),
        sa.CheckConstraint("bg_type IN ('color', 'image')", name='ck_theme_settings_bg_type'),
        sa.CheckConstraint(
            "button_style IN ('rectangular', 'rounded', 'pill')",
            name='ck_theme_settings_button_style',
        ),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('profile_id', name='uq_theme_settings_profile_id'),
    )

    op.create_table('links',
        sa.Column('id', sa.UUID(), server_default=sa.text('gen_random_uuid()'), nullable=False),
        sa.Column('profile_id', sa.UUID(), nullable=False),
        sa.Column('title', sa.String(length=100), nullable=False),
        sa.Column('url', sa.String(length=2048), nullable=False),
        sa.Column('icon_class', sa.String(length=50), server_default='link', nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('display_order', sa.Integer(), server_default='0', nullable=False),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_links_profile_id', 'links', ['profile_id'], unique=False)
    op.create_index('ix_links_profile_order', 'links', ['profile_id', 'display_order'], unique=False)

    # Theme rows are provisioned by the backend, not by the API
    op.execute("""
        CREATE OR REPLACE FUNCTION create_default_theme_settings()
        RETURNS trigger
        LANGUAGE plpgsql
        SECURITY DEFINER
        SET search_path = public
        AS $$
        BEGIN
            INSERT INTO theme_settings (profile_id) VALUES (NEW.id)
            ON CONFLICT (profile_id) DO NOTHING;
            RETURN NEW;
        END;
        $$;
    """)
    op.execute("""
        CREATE TRIGGER profiles_default_theme
            AFTER INSERT ON profiles
            FOR EACH ROW EXECUTE FUNCTION create_default_theme_settings();
    """)


def downgrade() -> None:
    """Drop profile tables and the default theme trigger."""
    op.execute("DROP TRIGGER IF EXISTS profiles_default_theme ON profiles;")
    op.execute("DROP FUNCTION IF EXISTS create_default_theme_settings();")
    op.drop_index('ix_links_profile_order', table_name='links')
    op.drop_index('ix_links_profile_id', table_name='links')
    op.drop_table('links')
    op.drop_table('theme_settings')
    op.drop_table('profiles')
