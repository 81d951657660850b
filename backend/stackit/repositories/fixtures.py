"""
StackIt Backend: Seed Fixtures
===============================

What:  The data the in-memory repositories start from, and the notifications
       seeded for each user on first access.
Why:   The web client was built against this data set; keeping it lets the
       client run against this backend unchanged.

Timestamps are computed relative to the moment the fixtures are built, so
"2 hours ago" stays 2 hours ago after every reset.
"""

from datetime import datetime, timedelta
from typing import List, Optional

from stackit.schemas.entities import (
    Answer,
    Notification,
    NotificationType,
    Question,
    Role,
    Tag,
    User,
    utcnow,
)


def seed_users(now: Optional[datetime] = None) -> List[User]:
    now = now or utcnow()
    return [
        User(id="1", username="reactdev", email="reactdev@example.com",
             reputation=1250, role=Role.USER, created_at=now),
        User(id="2", username="securitypro", email="security@example.com",
             reputation=3500, role=Role.USER, created_at=now),
        User(id="3", username="csswizard", email="css@example.com",
             reputation=890, role=Role.USER, created_at=now),
        User(id="4", username="typescriptpro", email="ts@example.com",
             reputation=2500, role=Role.USER, created_at=now),
        User(id="5", username="moderator", email="admin@example.com",
             reputation=10000, role=Role.ADMIN, created_at=now),
    ]


def seed_questions(now: Optional[datetime] = None) -> List[Question]:
    now = now or utcnow()

    return [
        Question(
            id="1",
            title="How to implement React hooks with TypeScript?",
            description=(
                "<p>I'm trying to use useState and useEffect hooks in my TypeScript React "
                "component, but I'm getting type errors. What's the proper way to type these "
                "hooks?</p><p>Here's what I've tried:</p><pre><code>const [count, setCount] = "
                "useState(0);\nconst [user, setUser] = useState(null);</code></pre><p>But "
                "TypeScript complains about the types. Any help would be appreciated!</p>"
            ),
            tags=["react", "typescript", "hooks"],
            author_id="1",
            votes=15,
            answers=[
                Answer(
                    id="1",
                    content=(
                        "<p>You need to specify the types explicitly when TypeScript can't infer "
                        "them:</p><pre><code>const [count, setCount] = useState&lt;number&gt;(0);\n"
                        "const [user, setUser] = useState&lt;User | null&gt;(null);</code></pre>"
                        "<p>This tells TypeScript exactly what types to expect.</p>"
                    ),
                    question_id="1",
                    author_id="4",
                    votes=8,
                    is_accepted=True,
                    created_at=now - timedelta(minutes=30),
                    updated_at=now - timedelta(minutes=30),
                ),
            ],
            accepted_answer_id="1",
            created_at=now - timedelta(hours=2),
            updated_at=now,
        ),
        Question(
            id="2",
            title="JWT Authentication best practices",
            description=(
                "<p>What are the current best practices for JWT authentication in web "
                "applications? Should I store tokens in localStorage or httpOnly cookies?</p>"
            ),
            tags=["jwt", "authentication", "security"],
            author_id="2",
            votes=23,
            answers=[
                Answer(
                    id="2",
                    content=(
                        "<p>Prefer httpOnly, Secure, SameSite cookies. Tokens in localStorage are "
                        "readable by any script that runs on the page.</p>"
                    ),
                    question_id="2",
                    author_id="1",
                    votes=12,
                    is_accepted=True,
                    created_at=now - timedelta(hours=5),
                    updated_at=now - timedelta(hours=5),
                ),
            ],
            accepted_answer_id="2",
            created_at=now - timedelta(hours=6),
            updated_at=now,
        ),
        Question(
            id="3",
            title="CSS Grid vs Flexbox - When to use which?",
            description=(
                "<p>I often get confused about when to use CSS Grid versus Flexbox. Can someone "
                "explain the key differences and use cases for each?</p>"
            ),
            tags=["css", "grid", "flexbox", "layout"],
            author_id="3",
            votes=8,
            answers=[
                Answer(
                    id="3",
                    content="<p>Flexbox lays out one dimension, Grid lays out two.</p>",
                    question_id="3",
                    author_id="4",
                    votes=3,
                    created_at=now - timedelta(hours=10),
                    updated_at=now - timedelta(hours=10),
                ),
                Answer(
                    id="4",
                    content=(
                        "<p>Use Grid for page-level layout and Flexbox for aligning items "
                        "inside a component.</p>"
                    ),
                    question_id="3",
                    author_id="1",
                    votes=1,
                    created_at=now - timedelta(hours=9),
                    updated_at=now - timedelta(hours=9),
                ),
            ],
            created_at=now - timedelta(hours=12),
            updated_at=now,
        ),
    ]


def seed_tags() -> List[Tag]:
    return [
        Tag(id="1", name="react", questions_count=1250),
        Tag(id="2", name="typescript", questions_count=980),
        Tag(id="3", name="javascript", questions_count=2100),
        Tag(id="4", name="css", questions_count=750),
        Tag(id="5", name="jwt", questions_count=320),
    ]


def seed_notifications(user_id: str, now: Optional[datetime] = None) -> List[Notification]:
    """The three notifications every user sees on first access."""
    now = now or utcnow()
    return [
        Notification(
            id="1",
            user_id=user_id,
            type=NotificationType.ANSWER,
            message="Someone answered your question about React hooks",
            target_id="1",
            is_read=False,
            created_at=now - timedelta(minutes=30),
        ),
        Notification(
            id="2",
            user_id=user_id,
            type=NotificationType.MENTION,
            message="You were mentioned in a comment",
            target_id="2",
            is_read=False,
            created_at=now - timedelta(hours=2),
        ),
        Notification(
            id="3",
            user_id=user_id,
            type=NotificationType.ACCEPTED,
            message="Your answer was accepted!",
            target_id="3",
            is_read=True,
            created_at=now - timedelta(days=1),
        ),
    ]
