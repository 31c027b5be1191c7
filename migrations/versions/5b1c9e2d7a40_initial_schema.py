"""initial_schema

Revision ID: 5b1c9e2d7a40
Revises:
Create Date: 2026-10-18 10:12:31.204117

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '5b1c9e2d7a40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def upgrade() -> None:
    """과목/분류 체계, 문제, 사용자, 진도 테이블 생성"""
    op.create_table(
        'subjects',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    op.create_table(
        'modules',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('subject_id', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['subject_id'], ['subjects.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name', 'subject_id', name='uq_modules_name_subject'),
    )
    op.create_index(op.f('ix_modules_subject_id'), 'modules', ['subject_id'], unique=False)

    op.create_table(
        'topics',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=300), nullable=False),
        sa.Column('module_id', sa.Integer(), nullable=False),
        sa.Column('length', sa.Integer(), nullable=True),
        sa.Column('difficulty', sa.Enum('Easy', 'Medium', 'Hard', name='topic_difficulty'), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['module_id'], ['modules.id'], ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_topics_module_id'), 'topics', ['module_id'], unique=False)

    op.create_table(
        'question_categories',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('subject_id', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['subject_id'], ['subjects.id'], ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_question_categories_name'), 'question_categories', ['name'], unique=True)
    op.create_index(op.f('ix_question_categories_subject_id'), 'question_categories', ['subject_id'], unique=False)

    op.create_table(
        'sub_categories',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('question_count', sa.Integer(), server_default='0', nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_sub_categories_name'), 'sub_categories', ['name'], unique=True)

    op.create_table(
        'sub_category_question_categories',
        sa.Column('sub_category_id', sa.Integer(), nullable=False),
        sa.Column('question_category_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['question_category_id'], ['question_categories.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['sub_category_id'], ['sub_categories.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('sub_category_id', 'question_category_id'),
    )

    op.create_table(
        'question_tags',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_question_tags_name'), 'question_tags', ['name'], unique=True)

    op.create_table(
        'exam_branches',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('exam_tag_names', postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_exam_branches_name'), 'exam_branches', ['name'], unique=True)

    op.create_table(
        'questions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('question_number', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('sub_category_id', sa.Integer(), nullable=False),
        sa.Column('sub_category_name', sa.String(length=200), nullable=False),
        sa.Column('question_category_id', sa.Integer(), nullable=False),
        sa.Column('question_category_name', sa.String(length=200), nullable=False),
        sa.Column('subject_name', sa.String(length=200), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('link', sa.String(length=1000), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('correct_answer', sa.Text(), nullable=True),
        sa.Column('correct_answers', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('numerical_answer', sa.Float(), nullable=True),
        sa.Column('numerical_answer_min', sa.Float(), nullable=True),
        sa.Column('numerical_answer_max', sa.Float(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['question_category_id'], ['question_categories.id'], ),
        sa.ForeignKeyConstraint(['sub_category_id'], ['sub_categories.id'], ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_questions_question_number'), 'questions', ['question_number'], unique=False)
    op.create_index(op.f('ix_questions_sub_category_id'), 'questions', ['sub_category_id'], unique=False)
    op.create_index(op.f('ix_questions_question_category_id'), 'questions', ['question_category_id'], unique=False)
    op.create_index(op.f('ix_questions_link'), 'questions', ['link'], unique=True)
    op.create_index(
        'ix_questions_denormalized_names',
        'questions',
        ['subject_name', 'question_category_name', 'sub_category_name', 'year'],
        unique=False,
    )
    op.create_index('ix_questions_year_number', 'questions', ['year', 'question_number'], unique=False)

    op.create_table(
        'question_tag_links',
        sa.Column('question_tag_id', sa.Integer(), nullable=False),
        sa.Column('question_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['question_id'], ['questions.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['question_tag_id'], ['question_tags.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('question_tag_id', 'question_id'),
    )

    op.create_table(
        'question_exam_branches',
        sa.Column('question_id', sa.Integer(), nullable=False),
        sa.Column('exam_branch_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['exam_branch_id'], ['exam_branches.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['question_id'], ['questions.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('question_id', 'exam_branch_id'),
    )

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=True),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('password_hash', sa.String(length=200), nullable=False),
        sa.Column('subscription_status', sa.Enum('Free', 'Premium', name='subscription_status'), nullable=False),
        sa.Column('is_admin', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('last_login', sa.DateTime(timezone=True), nullable=True),
        sa.Column('profile_picture_url', sa.String(length=1000), nullable=True),
        sa.Column('mobile_number', sa.String(length=20), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_user_id'), 'users', ['user_id'], unique=True)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'user_topic_progress',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('topic_id', sa.Integer(), nullable=False),
        sa.Column('is_completed', sa.Boolean(), nullable=False),
        sa.Column('to_revise', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['topic_id'], ['topics.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'topic_id', name='uq_user_topic_progress'),
    )
    op.create_index(op.f('ix_user_topic_progress_user_id'), 'user_topic_progress', ['user_id'], unique=False)
    op.create_index(op.f('ix_user_topic_progress_topic_id'), 'user_topic_progress', ['topic_id'], unique=False)

    op.create_table(
        'user_question_progress',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('question_id', sa.Integer(), nullable=False),
        sa.Column('time_spent', sa.Integer(), nullable=False),
        sa.Column('is_completed', sa.Boolean(), nullable=False),
        sa.Column('to_revise', sa.Boolean(), nullable=False),
        sa.Column('remarks', sa.Text(), nullable=False),
        sa.Column('attempted_at', sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('time_spent >= 0', name='ck_user_question_progress_time_spent'),
        sa.ForeignKeyConstraint(['question_id'], ['questions.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'question_id', name='uq_user_question_progress'),
    )
    op.create_index(op.f('ix_user_question_progress_user_id'), 'user_question_progress', ['user_id'], unique=False)
    op.create_index(
        op.f('ix_user_question_progress_question_id'),
        'user_question_progress',
        ['question_id'],
        unique=False,
    )


def downgrade() -> None:
    """전체 테이블 삭제"""
    op.drop_table('user_question_progress')
    op.drop_table('user_topic_progress')
    op.drop_table('users')
    op.drop_table('question_exam_branches')
    op.drop_table('question_tag_links')
    op.drop_table('questions')
    op.drop_table('exam_branches')
    op.drop_table('question_tags')
    op.drop_table('sub_category_question_categories')
    op.drop_table('sub_categories')
    op.drop_table('question_categories')
    op.drop_table('topics')
    op.drop_table('modules')
    op.drop_table('subjects')
    sa.Enum(name='subscription_status').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='topic_difficulty').drop(op.get_bind(), checkfirst=True)
