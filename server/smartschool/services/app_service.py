"""
School records service: lookup, filter and CRUD over the entity store.

Every operation returns an ApiResponse envelope. Missing records produce
ok=False with an empty payload instead of raising.
"""
import logging
import random
import string
from datetime import date
from typing import Dict, List, Optional

from smartschool.models import (
    AIActivity,
    Announcement,
    Assessment,
    AttendanceRecord,
    ResultData,
    SchemeSubmission,
    School,
    Student,
    Subject,
    User,
    UserRole,
    avatar_from_name,
)
from smartschool.schemas import (
    AIActivityRequest,
    ApiResponse,
    AssessmentInput,
    AttendanceInput,
    CreateSchoolRequest,
    CreateStudentRequest,
    CreateTeacherRequest,
    ResultInput,
    StudentUpdate,
    SubjectUpdate,
    UserUpdate,
    failure,
    success,
)
from smartschool.storage import EntityStore, new_id, utcnow

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("name", "avatar", "phone", "bio", "gender")


def generate_access_code(rng: random.Random = random) -> str:
    """Student login code, e.g. ``STU-K3QZ-482``."""
    letters = "".join(rng.choice(string.ascii_uppercase + string.digits) for _ in range(4))
    return f"STU-{letters}-{rng.randint(100, 999)}"


class AppService:
    def __init__(self, store: EntityStore):
        self.store = store

    def health(self) -> ApiResponse:
        return success({"status": "healthy"})

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    def verify_student(self, school_code: str, student_code: str) -> ApiResponse:
        """Resolve a student access code within the school identified by its code."""
        school = next((s for s in self.store.schools.values() if s.code == school_code), None)
        if not school:
            return failure("Invalid School Code")

        student = next(
            (
                s
                for s in self.store.students.values()
                if s.access_code == student_code and s.school_id == school.id
            ),
            None,
        )
        if not student:
            return failure("Invalid Student Access Code")

        return success(
            User(
                id=student.id,
                name=student.name,
                role=UserRole.STUDENT,
                email="",
                school_id=school.id,
                avatar=avatar_from_name(student.name),
                gender=student.gender,
            )
        )

    # ------------------------------------------------------------------
    # Schools
    # ------------------------------------------------------------------

    def get_schools(self) -> ApiResponse:
        return success(sorted(self.store.schools.values(), key=lambda s: s.name))

    def create_school(self, payload: CreateSchoolRequest) -> ApiResponse:
        school = School(
            id=new_id("sch"),
            name=payload.name,
            code=payload.code or f"SCH-{random.randint(0, 999)}",
            region=payload.region or "Default Region",
            admin_name=payload.admin_name or "Admin",
            status="Active",
            student_count=payload.student_count or 0,
            motto=payload.motto or "Knowledge is Power",
            logo_url=payload.logo_url or "",
            address=payload.address or "",
            contact=payload.contact or "",
        )
        with self.store.lock:
            self.store.schools[school.id] = school
        logger.info("🏫 School created: %s (%s)", school.name, school.code)
        return success(school, "School created successfully")

    def delete_school(self, school_id: str) -> ApiResponse:
        with self.store.lock:
            if self.store.schools.pop(school_id, None) is None:
                return failure("Unable to delete school", False)
        return success(True, "School deleted successfully")

    def update_school_status(self, school_id: str, status: str) -> ApiResponse:
        with self.store.lock:
            school = self.store.schools.get(school_id)
            if not school:
                return failure("School not found", False)
            school.status = status
        return success(True)

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def get_all_users(self) -> ApiResponse:
        """Staff users followed by every student projected as a STUDENT user."""
        students_as_users = [
            User(
                id=s.id,
                name=s.name,
                role=UserRole.STUDENT,
                email=f"student.{s.id}@school.edu",
                school_id=s.school_id,
                avatar=avatar_from_name(s.name),
                gender=s.gender,
            )
            for s in self.store.students.values()
        ]
        return success(list(self.store.users.values()) + students_as_users)

    def create_teacher(self, payload: CreateTeacherRequest) -> ApiResponse:
        with self.store.lock:
            school_id = payload.school_id or self.store.default_school_id()
            user = User(
                id=new_id("usr"),
                name=payload.name,
                email=payload.email.lower(),
                role=UserRole(payload.role) if payload.role else UserRole.TEACHER,
                avatar=payload.avatar or avatar_from_name(payload.name),
                school_id=school_id,
                gender=payload.gender,
                phone=payload.phone,
                bio=payload.bio,
            )
            self.store.users[user.id] = user
            self._apply_assignments(user.id, payload.form_class, payload.subject_ids)
        logger.info("👤 Staff created: %s (%s)", user.name, user.role.value)
        return success(user, "Staff member created successfully")

    def update_user_profile(self, user_id: str, updates: UserUpdate) -> ApiResponse:
        with self.store.lock:
            user = self.store.users.get(user_id)
            if not user:
                return failure("User not found")

            changes = {
                k: v
                for k, v in updates.model_dump(exclude_unset=True).items()
                if k in PROFILE_FIELDS and isinstance(v, str)
            }
            self._apply_assignments(user_id, updates.form_class, updates.subject_ids, updates.model_fields_set)

            if not changes:
                return success(user, "No profile changes applied")

            updated = user.model_copy(update=changes)
            self.store.users[user_id] = updated
        return success(updated, "Profile updated successfully")

    def delete_user(self, user_id: str) -> ApiResponse:
        with self.store.lock:
            if self.store.users.pop(user_id, None) is None:
                return failure("Unable to delete user", False)
            self._clear_class_masters(user_id)
        return success(True, "User deleted successfully")

    def _apply_assignments(
        self,
        teacher_id: str,
        form_class: Optional[str],
        subject_ids: Optional[List[str]],
        fields_set: Optional[set] = None,
    ) -> None:
        """Form-class and subject assignments carried by staff payloads."""
        form_class_given = form_class is not None if fields_set is None else "form_class" in fields_set
        if form_class_given:
            if form_class:
                self.assign_class_master(form_class, teacher_id)
            else:
                self._clear_class_masters(teacher_id)

        if subject_ids is not None:
            incoming = set(subject_ids)
            for subject in self.store.subjects.values():
                if subject.id in incoming:
                    subject.teacher_id = teacher_id
                elif subject.teacher_id == teacher_id:
                    subject.teacher_id = None

    def _clear_class_masters(self, teacher_id: str) -> None:
        for grade in [g for g, t in self.store.class_masters.items() if t == teacher_id]:
            del self.store.class_masters[grade]

    # ------------------------------------------------------------------
    # Students
    # ------------------------------------------------------------------

    def get_students(self, school_id: Optional[str] = None) -> ApiResponse:
        students = [s for s in self.store.students.values() if not school_id or s.school_id == school_id]
        return success(sorted(students, key=lambda s: s.name))

    def create_student(self, payload: CreateStudentRequest) -> ApiResponse:
        with self.store.lock:
            school_id = payload.school_id or self.store.default_school_id()
            if not school_id:
                return failure("No school available")
            access_code = generate_access_code()
            student = Student(
                id=new_id("stu"),
                name=payload.name,
                gender=payload.gender,
                grade=payload.grade,
                house=payload.house or "Unassigned",
                enrollment_date=payload.enrollment_date or date.today(),
                status=payload.status or "Active",
                gpa=payload.gpa if payload.gpa is not None else 0,
                attendance=payload.attendance if payload.attendance is not None else 0,
                school_id=school_id,
                access_code=access_code,
                enrolled_subjects=payload.enrolled_subjects or [],
            )
            self.store.students[student.id] = student
        logger.info("🎒 Student created: %s", student.name)
        return success(student, f"Access Code: {access_code}")

    def update_student(self, student_id: str, updates: StudentUpdate) -> ApiResponse:
        with self.store.lock:
            student = self.store.students.get(student_id)
            if not student:
                return failure("Student not found")
            updated = student.model_copy(update=updates.model_dump(exclude_unset=True, exclude_none=True))
            self.store.students[student_id] = updated
        return success(updated, "Student updated successfully")

    def delete_student(self, student_id: str) -> ApiResponse:
        with self.store.lock:
            if self.store.students.pop(student_id, None) is None:
                return failure("Unable to delete student", False)
        return success(True, "Student deleted successfully")

    # ------------------------------------------------------------------
    # Subjects and schemes of work
    # ------------------------------------------------------------------

    def get_subjects(self, school_id: Optional[str] = None) -> ApiResponse:
        subjects = [s for s in self.store.subjects.values() if not school_id or s.school_id == school_id]
        return success(sorted(subjects, key=lambda s: s.name))

    def create_subject(self, name: str, teacher_id: Optional[str] = None) -> ApiResponse:
        with self.store.lock:
            subject = Subject(
                id=new_id("sub"),
                name=name,
                teacher_id=teacher_id,
                schedule="TBD",
                room="TBD",
                school_id=self.store.school_id_for_user(teacher_id),
            )
            self.store.subjects[subject.id] = subject
        return success(subject, "Subject enrolled successfully")

    def update_subject(self, subject_id: str, updates: SubjectUpdate) -> ApiResponse:
        with self.store.lock:
            subject = self.store.subjects.get(subject_id)
            if not subject:
                return failure("Failed to update subject")
            # teacherId is the only nullable field; a null elsewhere keeps the stored value
            changes = {
                k: v for k, v in updates.model_dump(exclude_unset=True).items() if v is not None or k == "teacher_id"
            }
            if "teacher_id" in changes:
                changes["teacher_id"] = changes["teacher_id"] or None
            updated = subject.model_copy(update=changes)
            self.store.subjects[subject_id] = updated
        return success(updated, "Subject updated successfully")

    def get_schemes(self) -> ApiResponse:
        return success(sorted(self.store.schemes.values(), key=lambda s: s.upload_date, reverse=True))

    def upload_scheme(self, file_name: str, subject_name: str, term: str) -> ApiResponse:
        with self.store.lock:
            subject = next((s for s in self.store.subjects.values() if s.name == subject_name), None)
            scheme = SchemeSubmission(
                id=new_id("scheme"),
                subject_id=subject.id if subject else None,
                subject_name=subject_name,
                term=term,
                upload_date=utcnow(),
                status="Pending",
                file_name=file_name or "upload.bin",
            )
            self.store.schemes[scheme.id] = scheme
        return success({"id": scheme.id}, "Scheme uploaded successfully")

    # ------------------------------------------------------------------
    # Assessments and results
    # ------------------------------------------------------------------

    def get_assessments(
        self,
        subject_id: Optional[str] = None,
        term: Optional[str] = None,
        student_id: Optional[str] = None,
    ) -> ApiResponse:
        enrolled: List[str] = []
        if student_id:
            student = self.store.students.get(student_id)
            if not student:
                return failure("Student not found", [])
            enrolled = student.enrolled_subjects
            if subject_id and enrolled and subject_id not in enrolled:
                return success([], "Student not enrolled in subject")

        matches = []
        for a in self.store.assessments.values():
            if term and a.term != term:
                continue
            if student_id and a.student_id != student_id:
                continue
            if subject_id:
                if a.subject_id != subject_id:
                    continue
            elif enrolled and a.subject_id not in enrolled:
                continue
            matches.append(a)
        return success(matches)

    def save_assessments(self, assessments: List[AssessmentInput]) -> ApiResponse:
        """Upsert by id: a known id is replaced, anything else is appended."""
        with self.store.lock:
            for item in assessments:
                data = item.model_dump()
                data["id"] = item.id or new_id("asm")
                if not data["student_name"]:
                    student = self.store.students.get(item.student_id)
                    data["student_name"] = student.name if student else ""
                self.store.assessments[data["id"]] = Assessment(**data)
        return success({"success": True}, "Assessments saved successfully")

    def get_results(self, student_id: Optional[str] = None) -> ApiResponse:
        results = [r for r in self.store.results.values() if not student_id or r.student_id == student_id]
        return success(results)

    def publish_results(self, results: List[ResultInput]) -> ApiResponse:
        """Upsert by (student, subject name); existing results are shallow-merged."""
        with self.store.lock:
            for item in results:
                changes = item.model_dump(exclude_unset=True, exclude_none=True)
                subject_name = item.subject_name or "General Studies"
                changes["subject_name"] = subject_name
                key = (item.student_id, subject_name)

                existing = self.store.results.get(key)
                if existing:
                    changes.pop("id", None)
                    self.store.results[key] = existing.model_copy(update=changes)
                    continue

                changes.setdefault("id", new_id("res"))
                if "student_name" not in changes:
                    student = self.store.students.get(item.student_id)
                    changes["student_name"] = student.name if student else ""
                self.store.results[key] = ResultData(**changes)
        return success({"success": True}, "Results published successfully")

    # ------------------------------------------------------------------
    # Attendance
    # ------------------------------------------------------------------

    def get_attendance(self, on: date, grade: Optional[str] = None) -> ApiResponse:
        records = [r for (d, _), r in self.store.attendance.items() if d == on]
        if grade:
            in_grade = {s.id for s in self.store.students.values() if s.grade == grade}
            records = [r for r in records if r.student_id in in_grade]
        return success(records)

    def mark_attendance(self, updates: List[AttendanceInput]) -> ApiResponse:
        """
        Upsert attendance by (date, student).

        Every Absent mark also decrements the student's attendance counter by
        one, never below zero.
        """
        with self.store.lock:
            for update in updates:
                record = AttendanceRecord(student_id=update.student_id, status=update.status, date=update.date)
                self.store.attendance[(update.date, update.student_id)] = record

                if update.status == "Absent":
                    student = self.store.students.get(update.student_id)
                    if student and student.attendance > 0:
                        student.attendance -= 1
        return success(True, "Attendance marked successfully")

    # ------------------------------------------------------------------
    # Announcements, class masters, AI activity
    # ------------------------------------------------------------------

    def get_announcements(self, role: Optional[UserRole] = None) -> ApiResponse:
        audiences = {"all", "teachers", "students"}
        if role == UserRole.TEACHER:
            audiences = {"all", "teachers"}
        elif role == UserRole.STUDENT:
            audiences = {"all", "students"}

        items = [a for a in self.store.announcements.values() if a.target_audience in audiences]
        return success(sorted(items, key=lambda a: a.created_at, reverse=True))

    def create_announcement(self, title: str, message: str, target_audience: str, source: str) -> ApiResponse:
        announcement = Announcement(
            id=new_id("ann"),
            title=title,
            message=message,
            target_audience=target_audience,
            source=source,
            created_at=utcnow(),
        )
        with self.store.lock:
            self.store.announcements[announcement.id] = announcement
        return success(announcement, "Announcement created")

    def get_class_masters(self) -> ApiResponse:
        return success(dict(self.store.class_masters))

    def assign_class_master(self, grade: str, teacher_id: str) -> ApiResponse:
        with self.store.lock:
            self.store.class_masters[grade] = teacher_id
        return success(True)

    def log_ai_activity(self, entry: AIActivityRequest) -> ApiResponse:
        activity = AIActivity(
            id=new_id("ai"),
            created_at=utcnow(),
            **entry.model_dump(exclude={"school_id"}),
            school_id=entry.school_id or self.store.school_id_for_user(entry.actor_id),
        )
        with self.store.lock:
            self.store.ai_activities.append(activity)
        return success(activity)

    def get_ai_activities(self, limit: int = 25, **filters: Optional[str]) -> ApiResponse:
        """Newest first; `limit` is clamped to [1, 200]. Filters match by equality."""
        take = min(max(limit, 1), 200)
        active: Dict[str, str] = {k: v for k, v in filters.items() if v is not None}
        matches = [
            a
            for a in reversed(self.store.ai_activities)
            if all(getattr(a, field) == value for field, value in active.items())
        ]
        return success(matches[:take])
