"""Startup reference data: curriculum modules, achievements, scholarships."""
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from nextstep.models import Module
from nextstep.services.storage import Storage

logger = logging.getLogger(__name__)

SEED_MODULES = [
    {
        "title": "Career Exploration Fundamentals",
        "description": "Learn to identify your interests and potential career paths.",
        "category": "Career Exploration",
        "image_url": "https://images.unsplash.com/photo-1603468620905-8de7d86b781e?auto=format&fit=crop&w=1055&q=80",
        "duration": 45,
        "points": 250,
        "order": 1,
        "is_active": True,
    },
    {
        "title": "Resume Building Fundamentals",
        "description": "Create a standout resume that highlights your strengths.",
        "category": "Skill Building",
        "image_url": "https://images.unsplash.com/photo-1542744173-8e7e53415bb0?auto=format&fit=crop&w=1050&q=80",
        "duration": 60,
        "points": 300,
        "order": 2,
        "is_active": True,
    },
    {
        "title": "Interview Skills Mastery",
        "description": "Prepare for successful interviews with confidence.",
        "category": "Skill Building",
        "image_url": "https://images.unsplash.com/photo-1552664730-d307ca884978?auto=format&fit=crop&w=1050&q=80",
        "duration": 90,
        "points": 400,
        "order": 3,
        "is_active": True,
    },
]

SEED_ACHIEVEMENTS = [
    {
        "title": "Career Explorer",
        "description": "Complete the Career Exploration module",
        "icon": "medal",
        "points": 250,
        "requirement": "Complete Career Exploration Fundamentals module",
    },
    {
        "title": "Fast Learner",
        "description": "Complete a module in under 30 minutes",
        "icon": "book",
        "points": 300,
        "requirement": "Complete any module in less than 30 minutes",
    },
    {
        "title": "1K Points",
        "description": "Earn 1,000 points on the platform",
        "icon": "star",
        "points": 100,
        "requirement": "Reach 1,000 total points",
    },
    {
        "title": "Tech Savvy",
        "description": "Complete technology-related modules",
        "icon": "laptop-code",
        "points": 200,
        "requirement": "Complete two technology-related modules",
    },
]

SEED_SCHOLARSHIPS = [
    {
        "title": "Future Leaders Scholarship",
        "description": "Complete most modules to qualify for this scholarship",
        "amount": 1000,
        "points_required": 10000,
        "is_active": True,
    },
    {
        "title": "Career Readiness Scholarship",
        "description": "Complete the Career Readiness path to qualify",
        "amount": 500,
        "points_required": 5000,
        "is_active": True,
    },
    {
        "title": "Tech Innovator Scholarship",
        "description": "Complete the Tech Skills path to qualify",
        "amount": 750,
        "points_required": 8000,
        "is_active": True,
    },
]


async def seed_reference_data(db: AsyncSession) -> None:
    """Insert modules, achievements and scholarships if the store is empty."""
    existing = await db.scalar(select(func.count(Module.id)))
    if existing:
        return

    storage = Storage(db)
    for fields in SEED_MODULES:
        await storage.create_module(**fields)
    for fields in SEED_ACHIEVEMENTS:
        await storage.create_achievement(**fields)
    for fields in SEED_SCHOLARSHIPS:
        await storage.create_scholarship(**fields)

    logger.info(
        "Seeded %d modules, %d achievements, %d scholarships",
        len(SEED_MODULES),
        len(SEED_ACHIEVEMENTS),
        len(SEED_SCHOLARSHIPS),
    )
