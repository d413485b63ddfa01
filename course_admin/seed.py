"""`flask seed`: create the default courses, years, months and batches."""
import logging

import click
from flask.cli import with_appcontext

from course_admin import taxonomy
from course_admin.models import Course, Year, Month, Batch

logger = logging.getLogger(__name__)

DEFAULT_COURSES = [
    {"name": "web development", "description": "Full stack web development course"},
    {"name": "data science", "description": "Advanced data science and machine learning"},
]
DEFAULT_YEARS = ["2023", "2024", "2025", "2026", "2027"]
DEFAULT_MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]
DEFAULT_BATCHES = ["Batch 1", "Batch 2", "Batch 3", "Batch 4"]


def seed_defaults(courses=DEFAULT_COURSES, years=DEFAULT_YEARS,
                  months=DEFAULT_MONTHS, batches=DEFAULT_BATCHES):
    """Create whatever is missing; returns how many records were added."""
    created = 0
    for course_data in courses:
        course = Course.objects(name=course_data["name"]).first()
        if course is None:
            course = taxonomy.add_course(course_data["name"], course_data["description"])
            created += 1

        for label in years:
            year = Year.objects(course=course, year=label).first()
            if year is None:
                year = taxonomy.add_year(course, label, f"Academic year {label} for {course.name}")
                created += 1

            for month_name in months:
                month = Month.objects(name=month_name, year=year, course=course).first()
                if month is None:
                    month = taxonomy.add_month(year, month_name)
                    created += 1

                for batch_name in batches:
                    if not Batch.objects(name=batch_name, course=course, year=label, month=month).first():
                        taxonomy.add_batch(month, batch_name)
                        created += 1

    logger.info("Data initialization complete, %s records created", created)
    return created


@click.command("seed")
@with_appcontext
def seed_command():
    """Create default courses, years, months and batches."""
    created = seed_defaults()
    click.echo(f"✅ Seeded {created} records")
