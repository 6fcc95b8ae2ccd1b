"""Errors raised by the handicap and goal computations."""


class InvalidTee(ValueError):
    """A round references a tee that is not defined on its course."""

    def __init__(self, tee_name: str, course_name: str | None = None):
        self.tee_name = tee_name
        self.course_name = course_name
        where = f" on {course_name}" if course_name else ""
        super().__init__(f"Tee '{tee_name}' not found{where}")


class InvalidInput(ValueError):
    """A numeric input is outside what the calculation accepts."""

    pass
