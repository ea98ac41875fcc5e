# backend/scripts/seed_demo_data.py
"""
Seed a development database with an admin, a few members and one project
holding tasks, tags, documents and chat, enough to exercise the cascading
delete by hand.

Usage: python scripts/seed_demo_data.py
"""

from orquestra.db import SessionLocal
from orquestra.models import (
    User, ChatMessage, Document, DocumentVersion,
    Task, TaskAssignee, TaskComment, TaskHistory, TaskTag, TaskToTag,
)
from orquestra.enums import UserRole, ProjectRole
from orquestra.auth import hash_password
from orquestra.schemas import ProjectCreate
from orquestra.services.project_service import ProjectService
from orquestra.services.member_service import MemberService


# ----------------------------
# Tunables
# ----------------------------
DEMO_PASSWORD = "orquestra123"
DEMO_USERS = [
    ("Ada Admin", "admin@orquestra.dev", UserRole.ADMIN),
    ("Paula Manager", "paula@orquestra.dev", UserRole.PROJECT_MANAGER),
    ("Dev Silva", "dev@orquestra.dev", UserRole.DEVELOPER),
    ("Tomas Leader", "tomas@orquestra.dev", UserRole.TEAM_LEADER),
]
TASK_TITLES = ["Kickoff meeting", "Define milestones", "Set up CI"]

def get_or_create_user(db, name: str, email: str, role: UserRole) -> User:
    user = db.query(User).filter(User.email == email).first()
    if user:
        return user
    user = User(name=name, email=email, password_hash=hash_password(DEMO_PASSWORD), role=role.value)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user

def seed_project_content(db, project_id: int, author: User, others: list) -> None:
    tag = TaskTag(project_id=project_id, name="backend", color="#3366ff")
    db.add(tag)
    db.flush()

    for title in TASK_TITLES:
        task = Task(project_id=project_id, title=title)
        db.add(task)
        db.flush()
        db.add_all([
            TaskAssignee(task_id=task.id, user_id=author.id),
            TaskComment(task_id=task.id, user_id=author.id, content=f"First note on {title.lower()}"),
            TaskHistory(task_id=task.id, user_id=author.id, field_name="status", old_value=None, new_value="pending"),
            TaskToTag(task_id=task.id, tag_id=tag.id),
        ])

    document = Document(project_id=project_id, title="Project charter", created_by=author.id)
    db.add(document)
    db.flush()
    for number in (1, 2):
        db.add(DocumentVersion(
            document_id=document.id,
            version_number=number,
            file_path=f"uploads/charter-v{number}.pdf",
            original_name="charter.pdf",
            mime_type="application/pdf",
            size=1024 * number,
            uploaded_by=author.id,
        ))

    for user in [author] + others:
        db.add(ChatMessage(project_id=project_id, user_id=user.id, message=f"Hello from {user.name}"))
    db.commit()

def main():
    db = SessionLocal()
    try:
        users = [get_or_create_user(db, *entry) for entry in DEMO_USERS]
        _, manager, developer, leader = users

        project = ProjectService(db).create_project(
            ProjectCreate(name="Orquestra Launch", description="Initial rollout plan for Q1"),
            creator_id=manager.id,
        )
        members = MemberService(db)
        members.add_member(project.id, developer.id, ProjectRole.DEVELOPER)
        members.add_member(project.id, leader.id, ProjectRole.TEAM_LEADER)

        seed_project_content(db, project.id, manager, [developer, leader])
        print(f"Seeded project {project.id} with {len(users)} users. Password: {DEMO_PASSWORD}")
    finally:
        db.close()

if __name__ == "__main__":
    main()
