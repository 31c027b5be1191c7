"""seed_exam_branch_and_reserved_tags

Revision ID: 8d3f0a6c41e7
Revises: 5b1c9e2d7a40
Create Date: 2026-10-18 10:40:02.551930

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '8d3f0a6c41e7'
down_revision: Union[str, Sequence[str], None] = '5b1c9e2d7a40'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

RESERVED_TAGS = ['multiple-selects', 'numerical-answers', 'descriptive']


def upgrade() -> None:
    """gatecse 시험 분야와 문제 유형 예약 태그 추가"""
    exam_branches_table = sa.table(
        'exam_branches',
        sa.column('name', sa.String),
        sa.column('description', sa.Text),
        sa.column('exam_tag_names', postgresql.JSONB),
        sa.column('is_active', sa.Boolean),
    )
    op.bulk_insert(
        exam_branches_table,
        [
            {
                'name': 'gatecse',
                'description': 'GATE Computer Science and Information Technology',
                'exam_tag_names': [],
                'is_active': True,
            },
        ],
    )

    question_tags_table = sa.table(
        'question_tags',
        sa.column('name', sa.String),
        sa.column('is_active', sa.Boolean),
    )
    op.bulk_insert(
        question_tags_table,
        [{'name': name, 'is_active': True} for name in RESERVED_TAGS],
    )


def downgrade() -> None:
    op.execute("DELETE FROM question_tags WHERE name IN ('multiple-selects', 'numerical-answers', 'descriptive')")
    op.execute("DELETE FROM exam_branches WHERE name = 'gatecse'")
