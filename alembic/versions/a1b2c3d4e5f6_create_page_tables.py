"""create_page_tables

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-16 00:00:00.000000

Pages, versioned contents and their owned resources for the landing,
partner and FAQ page kinds.
"""

from __future__ import annotations

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic
revision: str = "a1b2c3d4e5f6"
down_revision: str | None = None
branch_labels: str | None = None
depends_on: str | None = None

PAGE_KINDS = ("landing", "partner", "faq")

# One live and one preview row per (page, language)
SLOT_FILTERS = {
    "current": "mode IN ('Draft', 'Published')",
    "preview": "mode = 'Preview'",
}


def _id_column() -> sa.Column:
    return sa.Column("id", sa.Uuid(), nullable=False)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def _content_columns() -> list[sa.Column]:
    return [
        sa.Column("page_id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("language", sa.String(10), nullable=False),
        sa.Column("html_input", sa.Text(), nullable=False),
        sa.Column("mode", sa.String(20), nullable=False),
        sa.Column("workflow_status", sa.String(50), nullable=False),
        sa.Column("publish_status", sa.String(50), nullable=False),
        sa.Column("url", sa.String(255), nullable=False),
        sa.Column("url_alias", sa.String(255), nullable=False, server_default=""),
        sa.Column("authored_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("publish_on", sa.DateTime(timezone=True), nullable=True),
        sa.Column("unpublish_on", sa.DateTime(timezone=True), nullable=True),
        sa.Column("authored_on", sa.DateTime(timezone=True), nullable=True),
        sa.Column("expired_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("approval_email", sa.JSON(), nullable=False),
        sa.Column("meta_tag_id", sa.Uuid(), nullable=True),
    ]


PARTNER_COLUMNS = [
    ("thumbnail_image", sa.String(512)),
    ("thumbnail_alt_text", sa.String(255)),
    ("company_logo", sa.String(512)),
    ("company_alt_text", sa.String(255)),
    ("company_name", sa.String(255)),
    ("company_detail", sa.Text()),
    ("lead_body", sa.Text()),
    ("challenges", sa.Text()),
    ("solutions", sa.Text()),
    ("results", sa.Text()),
]


def upgrade() -> None:
    # 1. Category taxonomy
    op.create_table(
        "category_types",
        _id_column(),
        sa.Column("type_code", sa.String(100), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_category_types_type_code", "category_types", ["type_code"], unique=True)

    op.create_table(
        "categories",
        _id_column(),
        sa.Column("category_type_id", sa.Uuid(), nullable=False),
        sa.Column("language_code", sa.String(10), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("weight", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("publish_status", sa.String(50), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["category_type_id"], ["category_types.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_categories_category_type_id", "categories", ["category_type_id"])
    op.create_index("ix_categories_language_code", "categories", ["language_code"])

    # 2. Meta tags, owned one-to-one by a content row
    op.create_table(
        "meta_tags",
        _id_column(),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("cover_image", sa.String(512), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    # 3. Pages and their content versions
    for kind in PAGE_KINDS:
        op.create_table(f"{kind}_pages", _id_column(), *_timestamps(), sa.PrimaryKeyConstraint("id"))

        extra = []
        if kind == "partner":
            extra = [sa.Column(name, type_, nullable=False, server_default="") for name, type_ in PARTNER_COLUMNS]
            extra.append(sa.Column("is_recommended", sa.Boolean(), nullable=False, server_default=sa.false()))

        op.create_table(
            f"{kind}_contents",
            _id_column(),
            *_content_columns(),
            *extra,
            *_timestamps(),
            sa.ForeignKeyConstraint(["page_id"], [f"{kind}_pages.id"], ondelete="CASCADE"),
            sa.ForeignKeyConstraint(["meta_tag_id"], ["meta_tags.id"], ondelete="SET NULL"),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("meta_tag_id"),
        )
        for column in ("page_id", "language", "mode", "url", "url_alias"):
            op.create_index(f"ix_{kind}_contents_{column}", f"{kind}_contents", [column])
        for slot, where in SLOT_FILTERS.items():
            op.create_index(
                f"uq_{kind}_contents_{slot}",
                f"{kind}_contents",
                ["page_id", "language"],
                unique=True,
                sqlite_where=sa.text(where),
                postgresql_where=sa.text(where),
            )

        op.create_table(
            f"{kind}_content_categories",
            sa.Column(f"{kind}_content_id", sa.Uuid(), nullable=False),
            sa.Column("category_id", sa.Uuid(), nullable=False),
            sa.ForeignKeyConstraint([f"{kind}_content_id"], [f"{kind}_contents.id"], ondelete="CASCADE"),
            sa.ForeignKeyConstraint(["category_id"], ["categories.id"], ondelete="CASCADE"),
            sa.PrimaryKeyConstraint(f"{kind}_content_id", "category_id"),
        )

    # 4. Landing attachments
    op.create_table(
        "landing_content_files",
        _id_column(),
        sa.Column("landing_content_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("download_url", sa.String(512), nullable=False),
        sa.Column("file_type", sa.String(10), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["landing_content_id"], ["landing_contents.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_landing_content_files_landing_content_id", "landing_content_files", ["landing_content_id"])

    # 5. Revisions and components, one nullable owner column per page kind
    owner_columns = [sa.Column(f"{kind}_content_id", sa.Uuid(), nullable=True) for kind in PAGE_KINDS]
    owner_keys = [
        sa.ForeignKeyConstraint([f"{kind}_content_id"], [f"{kind}_contents.id"], ondelete="CASCADE")
        for kind in PAGE_KINDS
    ]
    op.create_table(
        "revisions",
        _id_column(),
        *owner_columns,
        sa.Column("publish_status", sa.String(50), nullable=False),
        sa.Column("author", sa.String(255), nullable=False, server_default=""),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        *_timestamps(),
        *owner_keys,
        sa.PrimaryKeyConstraint("id"),
    )

    owner_columns = [sa.Column(f"{kind}_content_id", sa.Uuid(), nullable=True) for kind in PAGE_KINDS]
    owner_keys = [
        sa.ForeignKeyConstraint([f"{kind}_content_id"], [f"{kind}_contents.id"], ondelete="CASCADE")
        for kind in PAGE_KINDS
    ]
    op.create_table(
        "components",
        _id_column(),
        *owner_columns,
        sa.Column("type", sa.String(100), nullable=False),
        sa.Column("props", sa.JSON(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        *owner_keys,
        sa.PrimaryKeyConstraint("id"),
    )
    for table in ("revisions", "components"):
        for kind in PAGE_KINDS:
            op.create_index(f"ix_{table}_{kind}_content_id", table, [f"{kind}_content_id"])


def downgrade() -> None:
    for table in ("components", "revisions"):
        for kind in PAGE_KINDS:
            op.drop_index(f"ix_{table}_{kind}_content_id", table_name=table)
        op.drop_table(table)

    op.drop_index("ix_landing_content_files_landing_content_id", table_name="landing_content_files")
    op.drop_table("landing_content_files")

    for kind in reversed(PAGE_KINDS):
        op.drop_table(f"{kind}_content_categories")
        for slot in SLOT_FILTERS:
            op.drop_index(f"uq_{kind}_contents_{slot}", table_name=f"{kind}_contents")
        for column in ("page_id", "language", "mode", "url", "url_alias"):
            op.drop_index(f"ix_{kind}_contents_{column}", table_name=f"{kind}_contents")
        op.drop_table(f"{kind}_contents")
        op.drop_table(f"{kind}_pages")

    op.drop_table("meta_tags")
    op.drop_index("ix_categories_language_code", table_name="categories")
    op.drop_index("ix_categories_category_type_id", table_name="categories")
    op.drop_table("categories")
    op.drop_index("ix_category_types_type_code", table_name="category_types")
    op.drop_table("category_types")
