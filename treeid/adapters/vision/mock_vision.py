from treeid.adapters.vision.base import VisionAdapter
from treeid.orchestrator.contracts import IdentifyOutcome, ImagePayload, TreeData

MOCK_TREE = TreeData(
    common_name="English Oak",
    scientific_name="Quercus robur",
    description=(
        "A large deciduous tree with lobed leaves and acorns, common across "
        "Europe in mixed woodland and parkland."
    ),
    care_tips=(
        "Plant in full sun with plenty of room to spread.",
        "Water deeply during the first two summers.",
        "Prune only in late winter while dormant.",
    ),
)


class MockVision(VisionAdapter):
    name = "mock_vision"

    def __init__(self, status_store, result: TreeData = MOCK_TREE):
        super().__init__(status_store)
        self.result = result

    def identify(self, payload: ImagePayload) -> IdentifyOutcome:
        # Mock: ignore image content, return the canned tree
        self.status.log(f"mock_vision: {self.result.common_name} ({payload.mime_type})")
        return IdentifyOutcome.success(self.result)
