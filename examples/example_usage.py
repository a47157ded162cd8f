"""Example: drive the service layer directly (no Flask), on the in-memory store."""

from datetime import date

from src.school_attendance.school_attendance.container import build_container
from src.school_attendance.school_attendance.store.memory_record_store import InMemoryRecordStore


def main():
    container = build_container(store=InMemoryRecordStore())

    teacher = container.account_service.quick_login("teacher")
    student = container.account_service.quick_login("student")
    parent = container.account_service.quick_login("parent")

    # the demo teacher's class is generated; move the demo student into it
    class_id = container.teacher_dashboard.load(teacher.id, on=date.today()).selected_class.id
    container.store.update("users", student.id, {"class_id": class_id})

    today = date.today()
    container.teacher_dashboard.mark(teacher.id, student_id=student.id, status="present", on=today)
    print(container.student_dashboard.load(student.id, on=today).as_dict()["stats"])
    print(container.parent_dashboard.load(parent.id, on=today).as_dict()["children"])


if __name__ == "__main__":
    main()
