"""candidates / vote_recordsテーブルを作成.

Revision ID: 001
Revises:
Create Date: 2026-10-12

候補者名簿と得票台帳を保持するテーブルを作成する。
得票台帳は区分（ゾーン、セクション、地区、投票所）ごとの集計に
使うため、各区分列と正規化名にインデックスを張る。
"""

from alembic import op


revision = "001"
down_revision = None
branch_labels = None
depends_on = None


# SQLiteは1回のexecuteで1文しか実行できないため、文ごとに分ける
_INDEX_STATEMENTS = (
    "CREATE INDEX idx_vote_records_normalized_name "
    "ON vote_records(normalized_name)",
    "CREATE INDEX idx_vote_records_zone ON vote_records(zone)",
    "CREATE INDEX idx_vote_records_section ON vote_records(section)",
    "CREATE INDEX idx_vote_records_neighborhood ON vote_records(neighborhood)",
    "CREATE INDEX idx_vote_records_polling_place ON vote_records(polling_place)",
)


def _serial_type() -> str:
    """自動採番の主キー型を返す."""
    if op.get_bind().dialect.name == "postgresql":
        return "SERIAL"
    return "INTEGER"


def upgrade() -> None:
    """Apply migration: create candidates and vote_records tables."""
    op.execute("""
        CREATE TABLE candidates (
            id INTEGER PRIMARY KEY,
            display_name VARCHAR(255) NOT NULL,
            ballot_name VARCHAR(255),
            party_code VARCHAR(50),
            outcome_label VARCHAR(100),
            total_votes INTEGER NOT NULL DEFAULT 0,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """)
    op.execute(f"""
        CREATE TABLE vote_records (
            id {_serial_type()} PRIMARY KEY,
            candidate_name VARCHAR(255) NOT NULL,
            normalized_name VARCHAR(255) NOT NULL,
            zone VARCHAR(50),
            section VARCHAR(50),
            neighborhood VARCHAR(255),
            polling_place VARCHAR(255),
            vote_count INTEGER NOT NULL DEFAULT 0,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """)
    for statement in _INDEX_STATEMENTS:
        op.execute(statement)


def downgrade() -> None:
    """Rollback migration: drop candidates and vote_records tables."""
    op.execute("DROP TABLE IF EXISTS vote_records")
    op.execute("DROP TABLE IF EXISTS candidates")
