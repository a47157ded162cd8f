"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

RECENT_ATTENDANCE_LIMIT = 7
ID_RANDOM_LENGTH = 9

DEMO_STUDENT_CLASS_ID = "class_1"
DEMO_TEACHER_GRADE = "Grade 1"
DEMO_TEACHER_CLASS_PREFIX = "Grade 1A"

# role -> (name, email) used by quick-login
DEMO_ACCOUNTS = {
    "teacher": ("John Smith", "john.smith@school.edu"),
    "student": ("Alice Brown", "alice.brown@student.edu"),
    "parent": ("Robert Brown", "robert.brown@parent.com"),
}
