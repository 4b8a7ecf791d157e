"""Demo data written on first load when AUTO_SEED is enabled."""

from __future__ import annotations


def demo_snapshot() -> dict:
    def student(n: int, name: str, email: str, class_id: str, semester: int, roll_no: str, phone: str) -> dict:
        return {
            "id": f"student-{n}",
            "name": name,
            "email": email,
            "password": "student123",
            "role": "student",
            "department": "Computer Science",
            "classId": class_id,
            "semester": semester,
            "rollNo": roll_no,
            "phone": phone,
            "createdAt": "2025-06-01",
        }

    users = [
        {
            "id": "admin-1",
            "name": "Dr. Rajesh Kumar",
            "email": "admin@university.edu",
            "password": "admin123",
            "role": "admin",
            "department": "Administration",
            "phone": "9876543210",
            "createdAt": "2025-01-01",
        },
        {
            "id": "teacher-1",
            "name": "Prof. Anita Sharma",
            "email": "anita@university.edu",
            "password": "teacher123",
            "role": "teacher",
            "department": "Computer Science",
            "phone": "9876543211",
            "createdAt": "2025-01-15",
        },
        {
            "id": "teacher-2",
            "name": "Prof. Vikram Singh",
            "email": "vikram@university.edu",
            "password": "teacher123",
            "role": "teacher",
            "department": "Computer Science",
            "phone": "9876543212",
            "createdAt": "2025-02-01",
        },
        student(1, "Priya Patel", "priya@student.edu", "class-1", 4, "CS2024001", "9876543213"),
        student(2, "Rahul Verma", "rahul@student.edu", "class-1", 4, "CS2024002", "9876543214"),
        student(3, "Sanjana Gupta", "sanjana@student.edu", "class-1", 4, "CS2024003", "9876543215"),
        student(4, "Amit Kumar", "amit@student.edu", "class-1", 4, "CS2024004", "9876543216"),
        student(5, "Neha Reddy", "neha@student.edu", "class-2", 6, "CS2023001", "9876543217"),
        student(6, "Arjun Nair", "arjun@student.edu", "class-2", 6, "CS2023002", "9876543218"),
    ]

    classes = [
        {"id": "class-1", "name": "CS-4A", "department": "Computer Science", "semester": 4, "section": "A"},
        {"id": "class-2", "name": "CS-6A", "department": "Computer Science", "semester": 6, "section": "A"},
        {"id": "class-3", "name": "CS-2A", "department": "Computer Science", "semester": 2, "section": "A"},
    ]

    subjects = [
        {"id": "sub-1", "name": "Data Structures & Algorithms", "code": "CS301", "classId": "class-1", "teacherId": "teacher-1", "semester": 4},
        {"id": "sub-2", "name": "Database Management Systems", "code": "CS302", "classId": "class-1", "teacherId": "teacher-2", "semester": 4},
        {"id": "sub-3", "name": "Machine Learning", "code": "CS501", "classId": "class-2", "teacherId": "teacher-1", "semester": 6},
        {"id": "sub-4", "name": "Computer Networks", "code": "CS303", "classId": "class-1", "teacherId": "teacher-1", "semester": 4},
        {"id": "sub-5", "name": "Artificial Intelligence", "code": "CS502", "classId": "class-2", "teacherId": "teacher-2", "semester": 6},
    ]

    return {
        "users": users,
        "classes": classes,
        "subjects": subjects,
        "sessions": [],
        "attendance": [],
    }
