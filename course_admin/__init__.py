from course_admin.app import create_app

__all__ = ["create_app"]
