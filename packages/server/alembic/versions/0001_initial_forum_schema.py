"""Initial forum schema

Revision ID: 0001
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

UUID = postgresql.UUID(as_uuid=True)


def _id_column() -> sa.Column:
    return sa.Column('id', UUID, nullable=False)


def _created(name: str) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False)


def upgrade() -> None:
    # Users
    op.create_table('users',
        _id_column(),
        sa.Column('user_name', sa.String(), nullable=False),
        sa.Column('display_name', sa.String(), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('role', sa.String(), server_default='user', nullable=False),
        _created('created_at'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_user_name'), 'users', ['user_name'], unique=True)

    # Articles
    op.create_table('articles',
        _id_column(),
        sa.Column('author_id', UUID, nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('slug', sa.String(), nullable=False),
        sa.Column('body', sa.String(), nullable=False),
        sa.Column('publish_date', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['author_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_articles_id'), 'articles', ['id'], unique=False)
    op.create_index(op.f('ix_articles_author_id'), 'articles', ['author_id'], unique=False)
    op.create_index(op.f('ix_articles_slug'), 'articles', ['slug'], unique=True)
    op.create_index(op.f('ix_articles_publish_date'), 'articles', ['publish_date'], unique=False)

    # Forums, threads, posts
    op.create_table('forums',
        _id_column(),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.String(), server_default='', nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('title'),
    )
    op.create_index(op.f('ix_forums_id'), 'forums', ['id'], unique=False)

    op.create_table('threads',
        _id_column(),
        sa.Column('forum_id', UUID, nullable=False),
        sa.Column('author_id', UUID, nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        _created('created_date'),
        sa.Column('locked_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('archived_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['forum_id'], ['forums.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['author_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_threads_id'), 'threads', ['id'], unique=False)
    op.create_index(op.f('ix_threads_forum_id'), 'threads', ['forum_id'], unique=False)
    op.create_index(op.f('ix_threads_author_id'), 'threads', ['author_id'], unique=False)

    op.create_table('posts',
        _id_column(),
        sa.Column('thread_id', UUID, nullable=False),
        sa.Column('author_id', UUID, nullable=False),
        sa.Column('parent_id', UUID, nullable=True),
        sa.Column('content', sa.String(), nullable=False),
        _created('created_date'),
        sa.Column('modified_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('censored', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.ForeignKeyConstraint(['thread_id'], ['threads.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['author_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['parent_id'], ['posts.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_posts_id'), 'posts', ['id'], unique=False)
    op.create_index(op.f('ix_posts_thread_id'), 'posts', ['thread_id'], unique=False)
    op.create_index(op.f('ix_posts_author_id'), 'posts', ['author_id'], unique=False)
    op.create_index(op.f('ix_posts_parent_id'), 'posts', ['parent_id'], unique=False)

    # Buckets, questions, answers
    op.create_table('buckets',
        _id_column(),
        sa.Column('bucket_name', sa.String(), nullable=False),
        sa.Column('is_public', sa.Boolean(), server_default=sa.true(), nullable=False),
        _created('created_date'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_buckets_id'), 'buckets', ['id'], unique=False)

    op.create_table('bucket_users',
        sa.Column('bucket_id', UUID, nullable=False),
        sa.Column('user_id', UUID, nullable=False),
        sa.Column('owner', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('approved', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.ForeignKeyConstraint(['bucket_id'], ['buckets.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('bucket_id', 'user_id'),
    )

    op.create_table('questions',
        _id_column(),
        sa.Column('bucket_id', UUID, nullable=False),
        sa.Column('author_id', UUID, nullable=False),
        sa.Column('question_text', sa.String(), nullable=False),
        _created('created_date'),
        sa.ForeignKeyConstraint(['bucket_id'], ['buckets.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['author_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_questions_id'), 'questions', ['id'], unique=False)
    op.create_index(op.f('ix_questions_bucket_id'), 'questions', ['bucket_id'], unique=False)
    op.create_index(op.f('ix_questions_author_id'), 'questions', ['author_id'], unique=False)

    op.create_table('answers',
        _id_column(),
        sa.Column('question_id', UUID, nullable=False),
        sa.Column('author_id', UUID, nullable=False),
        sa.Column('answer_text', sa.String(), nullable=True),
        sa.ForeignKeyConstraint(['question_id'], ['questions.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['author_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_answers_id'), 'answers', ['id'], unique=False)
    op.create_index(op.f('ix_answers_question_id'), 'answers', ['question_id'], unique=False)
    op.create_index(op.f('ix_answers_author_id'), 'answers', ['author_id'], unique=False)

    # Chats and messages
    op.create_table('chats',
        _id_column(),
        sa.Column('chat_name', sa.String(), nullable=False),
        sa.Column('leader_id', UUID, nullable=False),
        _created('created_date'),
        sa.ForeignKeyConstraint(['leader_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_chats_id'), 'chats', ['id'], unique=False)
    op.create_index(op.f('ix_chats_leader_id'), 'chats', ['leader_id'], unique=False)

    op.create_table('chat_users',
        sa.Column('chat_id', UUID, nullable=False),
        sa.Column('user_id', UUID, nullable=False),
        sa.ForeignKeyConstraint(['chat_id'], ['chats.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('chat_id', 'user_id'),
    )

    op.create_table('messages',
        _id_column(),
        sa.Column('chat_id', UUID, nullable=False),
        sa.Column('author_id', UUID, nullable=False),
        sa.Column('reply_id', UUID, nullable=True),
        sa.Column('message_content', sa.String(), nullable=False),
        sa.Column('read_flag', sa.Boolean(), server_default=sa.false(), nullable=False),
        _created('create_date'),
        sa.ForeignKeyConstraint(['chat_id'], ['chats.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['author_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['reply_id'], ['messages.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_messages_id'), 'messages', ['id'], unique=False)
    op.create_index(op.f('ix_messages_chat_id'), 'messages', ['chat_id'], unique=False)
    op.create_index(op.f('ix_messages_author_id'), 'messages', ['author_id'], unique=False)
    op.create_index(op.f('ix_messages_create_date'), 'messages', ['create_date'], unique=False)


def downgrade() -> None:
    for table in (
        'messages', 'chat_users', 'chats',
        'answers', 'questions', 'bucket_users', 'buckets',
        'posts', 'threads', 'forums',
        'articles', 'users',
    ):
        op.drop_table(table)
