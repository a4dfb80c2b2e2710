"""
Demo data for the in-memory store.

Fixed records come first; the remaining students and results are generated
from a `random.Random` so a given seed always yields the same store.
"""
import random
from datetime import date, datetime, timezone
from typing import List

from smartschool.models import (
    ActiveExam,
    Assessment,
    ExamQuestion,
    ExamStatus,
    QuestionType,
    ResultData,
    SchemeSubmission,
    School,
    Student,
    Subject,
    User,
    UserRole,
)

GRADES = ["9th", "10th", "11th", "12th"]
SUBJECT_NAMES = ["Mathematics 101", "Physics Basics", "Computer Science"]

DEFAULT_CLASS_MASTERS = {"10th": "u1", "11th": "t3"}


def mock_schools() -> List[School]:
    return [
        School(
            id="sch_001",
            name="Springfield High School",
            code="SPR-001",
            region="North District",
            admin_name="Principal Skinner",
            status="Active",
            student_count=450,
            motto="Knowledge is Power",
        ),
        School(
            id="sch_002",
            name="Westside Academy",
            code="WST-002",
            region="West District",
            admin_name="Sarah Connor",
            status="Active",
            student_count=320,
            motto="Excellence in All Things",
        ),
        School(
            id="sch_003",
            name="Downtown International",
            code="DTN-003",
            region="City Center",
            admin_name="James Bond",
            status="Inactive",
            student_count=0,
        ),
    ]


def mock_users() -> List[User]:
    return [
        User(
            id="u1",
            name="Alex Johnson",
            email="alex.j@smartschool.edu",
            role=UserRole.TEACHER,
            avatar="https://picsum.photos/200/200",
            school_id="sch_001",
            gender="Male",
        ),
        User(
            id="t3",
            name="Grace Okafor",
            email="grace.o@smartschool.edu",
            role=UserRole.TEACHER,
            school_id="sch_001",
            gender="Female",
        ),
        User(
            id="ad1",
            name="Principal Skinner",
            email="principal@springfield.edu",
            role=UserRole.ADMIN,
            school_id="sch_001",
            gender="Male",
        ),
        User(
            id="sa1",
            name="System Creator",
            email="creator@smartschool.edu",
            role=UserRole.SUPER_ADMIN,
            avatar="https://ui-avatars.com/api/?name=System+Creator&background=0D8ABC&color=fff",
            gender="Male",
        ),
    ]


_FIXED_STUDENTS = [
    # id, name, gender, grade, enrolled, status, gpa, attendance, school
    ("s1", "Emma Thompson", "Female", "10th", date(2023, 9, 1), "Active", 3.8, 98, "sch_001"),
    ("s2", "Liam Wilson", "Male", "10th", date(2023, 9, 1), "Active", 3.2, 92, "sch_001"),
    ("s3", "Olivia Davis", "Female", "11th", date(2022, 9, 1), "Inactive", 2.9, 85, "sch_001"),
    ("s4", "Noah Martinez", "Male", "9th", date(2024, 9, 1), "Active", 3.5, 95, "sch_002"),
    ("s5", "Ava Taylor", "Female", "12th", date(2021, 9, 1), "Active", 4.0, 99, "sch_001"),
    ("s6", "William Brown", "Male", "11th", date(2022, 9, 1), "Suspended", 1.8, 60, "sch_002"),
    ("s7", "Sophia Anderson", "Female", "10th", date(2023, 9, 1), "Active", 3.9, 96, "sch_001"),
]


def mock_students(count: int, rng: random.Random) -> List[Student]:
    """The seven fixed students plus generated ones up to `count`."""
    students = [
        Student(
            id=sid,
            name=name,
            gender=gender,
            grade=grade,
            enrollment_date=enrolled,
            status=status,
            gpa=gpa,
            attendance=attendance,
            school_id=school_id,
            access_code=f"STU-2024-{sid[1:].zfill(3)}",
        )
        for sid, name, gender, grade, enrolled, status, gpa, attendance, school_id in _FIXED_STUDENTS
    ]

    for i in range(len(students) + 1, count + 1):
        students.append(
            Student(
                id=f"s{i}",
                name=f"Student {i}",
                gender="Male" if rng.random() > 0.5 else "Female",
                grade=rng.choice(GRADES),
                enrollment_date=date(2020 + rng.randint(1, 3), 9, rng.randint(1, 28)),
                status="Inactive" if rng.random() > 0.9 else "Active",
                gpa=round(rng.random() * 2 + 2, 1),
                attendance=rng.randint(80, 99),
                school_id="sch_001",
                access_code=f"STU-2024-{i:03d}",
            )
        )
    return students


def mock_subjects() -> List[Subject]:
    return [
        Subject(id="sub1", name="Mathematics 101", teacher_id="u1", schedule="Mon, Wed 09:00 AM", room="Rm 204", school_id="sch_001"),
        Subject(id="sub2", name="Physics Basics", teacher_id="u1", schedule="Tue, Thu 11:00 AM", room="Lab 3", school_id="sch_001"),
        Subject(id="sub3", name="Computer Science", teacher_id="u1", schedule="Fri 01:00 PM", room="Lab 1", school_id="sch_001"),
    ]


def mock_schemes() -> List[SchemeSubmission]:
    def uploaded(y, m, d):
        return datetime(y, m, d, tzinfo=timezone.utc)

    return [
        SchemeSubmission(id="scheme1", subject_id="sub1", subject_name="Mathematics 101", term="Term 1",
                         upload_date=uploaded(2023, 9, 10), status="Approved", file_name="Math_Term1_SoW.pdf"),
        SchemeSubmission(id="scheme2", subject_id="sub2", subject_name="Physics Basics", term="Term 1",
                         upload_date=uploaded(2023, 9, 12), status="Approved", file_name="Physics_Term1_SoW.docx"),
        SchemeSubmission(id="scheme3", subject_id="sub3", subject_name="Computer Science", term="Term 2",
                         upload_date=uploaded(2024, 1, 5), status="Pending", file_name="CS_Term2_Draft.xlsx"),
    ]


def mock_assessments() -> List[Assessment]:
    return [
        Assessment(id="a1", student_id="s1", student_name="Emma Thompson", subject_id="sub1", term="Term 1",
                   ca1=9, ca2=8, ca3=10, exam=65),
        Assessment(id="a2", student_id="s2", student_name="Liam Wilson", subject_id="sub1", term="Term 1",
                   ca1=7, ca2=6, ca3=8, exam=55),
        Assessment(id="a3", student_id="s7", student_name="Sophia Anderson", subject_id="sub1", term="Term 1",
                   ca1=10, ca2=9, ca3=10, exam=68),
    ]


def letter_grade(total: float) -> str:
    if total >= 90:
        return "A+"
    if total >= 80:
        return "A"
    if total >= 70:
        return "B"
    if total >= 60:
        return "C"
    if total >= 50:
        return "D"
    return "F"


_FIXED_RESULTS = [
    ("r1", "s1", "Emma Thompson", "Mathematics 101", 92.5, "A+", "Published",
     "Outstanding performance throughout the term.", (9, 8, 10, 65)),
    ("r2", "s2", "Liam Wilson", "Mathematics 101", 78.4, "B", "Published", "", (7, 6, 8, 55)),
    ("r3", "s3", "Olivia Davis", "Physics Basics", 65.2, "C", "Draft",
     "Shows improvement but needs more focus on Sciences.", (6, 5, 7, 47)),
    ("r4", "s4", "Noah Martinez", "Mathematics 101", 88.9, "A", "Published", "", (9, 9, 8, 62)),
    ("r5", "s5", "Ava Taylor", "Computer Science", 95.0, "A+", "Published",
     "Exceptional work. A role model for the class.", (10, 10, 10, 65)),
    ("r6", "s6", "William Brown", "Physics Basics", 45.5, "F", "withheld", "Academic warning issued.", (4, 3, 5, 33.5)),
    ("r7", "s7", "Sophia Anderson", "Mathematics 101", 97.0, "A+", "Published", "Perfect scores.", (10, 9, 10, 68)),
]


def mock_results(count: int, rng: random.Random) -> List[ResultData]:
    results = []
    for rid, sid, name, subject, average, grade, status, remarks, scores in _FIXED_RESULTS:
        ca1, ca2, ca3, exam = scores
        results.append(
            ResultData(
                id=rid, student_id=sid, student_name=name, subject_name=subject, average=average,
                grade=grade, status=status, remarks=remarks,
                details={"ca1": ca1, "ca2": ca2, "ca3": ca3, "exam": exam},
            )
        )

    for i in range(len(results) + 1, count + 1):
        exam = rng.randint(30, 69)
        ca1, ca2, ca3 = (rng.randint(5, 9) for _ in range(3))
        total = exam + ca1 + ca2 + ca3
        results.append(
            ResultData(
                id=f"r{i}",
                student_id=f"s{i}",
                student_name=f"Student {i}",
                subject_name=rng.choice(SUBJECT_NAMES),
                average=total,
                grade=letter_grade(total),
                status="Draft" if rng.random() > 0.8 else "Published",
                remarks="",
                details={"ca1": ca1, "ca2": ca2, "ca3": ca3, "exam": exam},
            )
        )
    return results


def mock_exams() -> List[ActiveExam]:
    mc, tf, sa = QuestionType.MULTIPLE_CHOICE, QuestionType.TRUE_FALSE, QuestionType.SHORT_ANSWER
    return [
        ActiveExam(
            id="exam_001",
            title="Term 1 General Knowledge",
            status=ExamStatus.ACTIVE,
            duration=45,
            teacher_id="u1",
            questions=[
                ExamQuestion(id="q1", type=mc, text="What is the powerhouse of the cell?",
                             options=["Nucleus", "Mitochondria", "Ribosome", "Cytoplasm"],
                             correct_answer="Mitochondria", points=5),
                ExamQuestion(id="q2", type=tf, text="The sun revolves around the earth.",
                             options=[], correct_answer="False", points=5),
                ExamQuestion(id="q3", type=mc, text="Which element has the chemical symbol O?",
                             options=["Gold", "Oxygen", "Osmium", "Olive Oil"],
                             correct_answer="Oxygen", points=5),
            ],
        ),
        ActiveExam(
            id="exam_002",
            title="Mathematics Mid-Term",
            status=ExamStatus.SCHEDULED,
            duration=60,
            teacher_id="u1",
            questions=[
                ExamQuestion(id="mq1", type=sa, text="What is 12 * 12?", correct_answer="144", points=2),
                ExamQuestion(id="mq2", type=mc, text="Solve for x: 2x = 10",
                             options=["2", "5", "10", "20"], correct_answer="5", points=2),
            ],
        ),
        ActiveExam(
            id="exam_003",
            title="Physics Pop Quiz",
            status=ExamStatus.ACTIVE,
            duration=15,
            teacher_id="u1",
            questions=[
                ExamQuestion(id="pq1", type=tf, text="Velocity is a vector quantity.",
                             options=[], correct_answer="True", points=5),
            ],
        ),
    ]
