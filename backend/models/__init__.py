from models.enums import DayOfWeek, YearOfStudy
from models.timetable_entry import TimetableEntry

__all__ = [
	"DayOfWeek",
	"TimetableEntry",
	"YearOfStudy",
]
