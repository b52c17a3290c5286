from timetable.models.academic_year import AcademicYear  # noqa: F401
from timetable.models.schedule_slot import ScheduleSlotRecord  # noqa: F401
