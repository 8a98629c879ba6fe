import logging

from blog_api.db.base import SessionLocal, init_db
from blog_api.models.post import PostStatus
from blog_api.repos.posts_repo import PostsRepo
from blog_api.schemas.post import PostCreate
from blog_api.services.posts_service import PostsService

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SAMPLE_POSTS = [
    PostCreate(
        title="Welcome to Teacher AI Academy",
        summary=(
            "Discover how artificial intelligence can transform your teaching "
            "practice and enhance student learning outcomes."
        ),
        contentMarkdown=(
            "# Welcome to Teacher AI Academy\n\n"
            "We're excited to help you integrate AI into your teaching practice.\n\n"
            "## What You'll Learn\n\n"
            "- AI fundamentals for educators\n"
            "- Practical implementation strategies\n"
            "- Assessment and evaluation techniques\n"
            "- Ethical considerations and best practices\n"
        ),
        tags=["welcome", "introduction", "ai-education"],
        status=PostStatus.PUBLISHED,
    ),
    PostCreate(
        title="Getting Started with AI in the Classroom",
        summary=(
            "Learn the essential first steps for introducing AI tools and concepts "
            "to your students in a safe and effective way."
        ),
        contentMarkdown=(
            "# Getting Started with AI in the Classroom\n\n"
            "Start small: pick one lesson, one tool, and one clear learning goal.\n"
        ),
        tags=["getting-started", "classroom", "ai-tools"],
        status=PostStatus.PUBLISHED,
    ),
    PostCreate(
        title="AI Assessment Ideas (Draft)",
        contentMarkdown="Notes for an upcoming post on AI-assisted assessment.",
        tags=["assessment"],
        status=PostStatus.DRAFT,
    ),
]


def seed(service: PostsService) -> int:
    """Insert the sample posts into an empty database. Returns how many were added."""
    if service.repo.count(None) > 0:
        logger.info("Database already has posts, skipping seed")
        return 0
    for data in SAMPLE_POSTS:
        service.create(data)
    return len(SAMPLE_POSTS)


if __name__ == "__main__":
    init_db()
    session = SessionLocal()
    try:
        added = seed(PostsService(PostsRepo(session)))
        logger.info(f"Seeded {added} posts.")
    except Exception as e:
        logger.error(f"Seeding failed: {e}", exc_info=True)
    finally:
        session.close()
