"""Points and achievement rules; fixed career recommendation set."""
from nextstep.models import Achievement, Module, UserProgress

COMPLETE = 100

# Deterministic recommendations stored by the generate action
FIXED_CAREER_RECOMMENDATIONS = [
    {
        "title": "Software Developer",
        "description": "Design, build, and maintain software applications",
        "match_score": 85,
        "field_of_study": "Computer Science",
        "avg_salary": 110000,
        "edu_requirements": "Bachelor's degree in Computer Science or related field",
    },
    {
        "title": "UX/UI Designer",
        "description": "Create user-friendly interfaces and improve user experience",
        "match_score": 78,
        "field_of_study": "Design, Human-Computer Interaction",
        "avg_salary": 90000,
        "edu_requirements": "Bachelor's degree in Design or related field",
    },
    {
        "title": "Data Scientist",
        "description": "Analyze data to help organizations make better decisions",
        "match_score": 70,
        "field_of_study": "Data Science, Statistics",
        "avg_salary": 120000,
        "edu_requirements": "Bachelor's or Master's degree in Statistics, Computer Science, or related field",
    },
]

RECOMMENDATION_BATCH_SIZE = 3


def earns_completion_points(progress: int, is_completed: bool) -> bool:
    """Module points are credited on every submission at 100% marked complete.

    Known issue: repeated 100% submissions credit again; there is no check
    for an earlier completion.
    """
    return progress == COMPLETE and is_completed


def achievements_for_module(achievements: list[Achievement], module: Module) -> list[Achievement]:
    """Achievements whose free-text requirement mentions the module title."""
    return [a for a in achievements if module.title in a.requirement]


def completed_count(progress_rows: list[UserProgress]) -> int:
    return sum(1 for p in progress_rows if p.is_completed)


def scholarship_progress(points: int, points_required: int) -> int:
    """Percent of the way to a scholarship, capped at 100."""
    if points_required <= 0:
        return 100
    return min(100, int(points / points_required * 100))
