from slotwise.models.conflict import Conflict  # noqa: F401
from slotwise.models.course import Course  # noqa: F401
from slotwise.models.program import Program  # noqa: F401
from slotwise.models.schedule import Schedule  # noqa: F401
from slotwise.models.teacher import Teacher  # noqa: F401
