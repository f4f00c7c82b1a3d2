from nextstep.services.ai import AIGateway
from nextstep.services.seeding import seed_reference_data
from nextstep.services.storage import Storage

__all__ = ["AIGateway", "Storage", "seed_reference_data"]
