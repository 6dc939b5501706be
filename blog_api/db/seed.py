import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from blog_api.models.blog_post import BlogPost
from blog_api.repos.blog_posts_repo import SqlBlogPostsRepo
from blog_api.schemas.blog import BlogCreate
from blog_api.services.blogs_service import BlogsService

logger = logging.getLogger(__name__)

SAMPLE_POSTS = [
    {
        "title": "The Future of Web Accessibility: AI-Powered Inclusive Design",
        "content": (
            "<h2>Introduction</h2><p>Web accessibility matters more every year. "
            "AI-powered inclusive design can adapt interfaces to the needs of each reader.</p>"
            "<h2>AI-Driven Accessibility Features</h2><ul>"
            "<li><strong>Automatic alt text:</strong> image descriptions for screen readers.</li>"
            "<li><strong>Real-time captions:</strong> speech-to-text for video content.</li>"
            "<li><strong>Adaptive UI:</strong> layouts that follow user preferences.</li>"
            "<li><strong>Voice navigation:</strong> hands-free browsing.</li></ul>"
            "<p>The future is bright for inclusive web experiences that serve everyone.</p>"
        ),
        "excerpt": (
            "Explore how AI-powered technologies are changing web accessibility "
            "and creating inclusive digital experiences for all users."
        ),
        "author": "Dr. Sarah Chen",
        "published": True,
        "featured": True,
        "tags": "accessibility, AI, inclusive design, web development, WCAG",
        "meta_title": "AI-Powered Web Accessibility: Inclusive Design",
        "meta_description": (
            "How artificial intelligence is transforming web accessibility with "
            "automatic alt text, real-time captions and adaptive interfaces."
        ),
    },
    {
        "title": "Mobile-First Accessibility: Designing for Touch and Voice",
        "content": (
            "<h2>Touch Accessibility Fundamentals</h2><ul>"
            "<li><strong>Target size:</strong> at least 44px touch targets.</li>"
            "<li><strong>Gesture alternatives:</strong> buttons for complex gestures.</li>"
            "<li><strong>One-handed operation:</strong> thumb-friendly navigation.</li></ul>"
            "<h2>Testing</h2><p>Test with VoiceOver, TalkBack, switch control and zoom.</p>"
        ),
        "author": "Alex Rivera",
        "published": True,
        "featured": True,
        "tags": "mobile accessibility, touch interfaces, voice commands, mobile UX",
        "meta_title": "Mobile-First Accessibility: Touch and Voice",
        "meta_description": (
            "Design accessible mobile interfaces with touch-friendly controls, "
            "voice commands and mobile accessibility testing."
        ),
    },
    {
        "title": "Dark Mode Accessibility: Beyond Just Inverting Colors",
        "content": (
            "<h2>Why Dark Mode Matters</h2><p>Dark mode can reduce eye strain and "
            "helps readers with light sensitivity.</p><h2>Design Principles</h2>"
            "<ul><li>Keep WCAG contrast ratios in both themes.</li>"
            "<li>Avoid pure black backgrounds to limit halation.</li>"
            "<li>Respect the operating system preference and offer a manual toggle.</li></ul>"
        ),
        "author": "Maya Patel",
        "published": True,
        "featured": False,
        "tags": "dark mode, color contrast, visual design, WCAG",
        "meta_title": "Dark Mode Accessibility Design Principles",
        "meta_description": (
            "Build accessible dark themes: contrast ratios, color choices and "
            "testing strategies that go beyond inverting colors."
        ),
    },
    {
        "title": "Keyboard Navigation Patterns for Complex Widgets",
        "content": (
            "<p>Menus, tabs, grids and dialogs all need predictable keyboard support. "
            "Use roving tabindex, visible focus styles and return focus when a dialog closes.</p>"
        ),
        "author": "Jordan Lee",
        "published": False,
        "featured": False,
        "tags": "keyboard navigation, focus management, ARIA",
    },
]


def seed_database(db: Session, service: BlogsService = None) -> int:
    """Insert the sample posts when the table is empty. Returns the number inserted."""
    existing = db.query(func.count(BlogPost.id)).scalar()
    if existing:
        logger.info("Database already contains blog posts, skipping seed")
        return 0

    service = service or BlogsService(SqlBlogPostsRepo(db))
    logger.info("Seeding database with sample blog posts...")
    for data in SAMPLE_POSTS:
        service.create_blog(BlogCreate(**data))
    logger.info(f"Seeded {len(SAMPLE_POSTS)} blog posts")
    return len(SAMPLE_POSTS)
