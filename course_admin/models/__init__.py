from course_admin.models.course import Course
from course_admin.models.year import Year
from course_admin.models.month import Month
from course_admin.models.batch import Batch
from course_admin.models.student import Student
from course_admin.models.cohort import CohortSummary

ALL_DOCUMENTS = (Course, Year, Month, Batch, Student, CohortSummary)

__all__ = ["Course", "Year", "Month", "Batch", "Student", "CohortSummary", "ALL_DOCUMENTS"]
