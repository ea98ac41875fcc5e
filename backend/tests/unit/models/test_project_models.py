import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from orquestra import models


class TestUser:
    def test_create_user_defaults(self, db_session: Session):
        user = models.User(name="Dev Silva", email="dev@example.com", password_hash="hashed_password")
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)

        assert user.id is not None
        assert user.role == "developer"
        assert user.is_admin is False
        assert user.created_at is not None

    def test_user_email_unique(self, db_session: Session, developer):
        with pytest.raises(IntegrityError):
            db_session.add(models.User(name="Copy", email=developer.email, password_hash="x"))
            db_session.commit()


class TestProjectMember:
    def test_membership_is_unique_per_project_and_user(self, db_session: Session, make_project, creator):
        project = make_project(creator)

        with pytest.raises(IntegrityError):
            db_session.add(models.ProjectMember(project_id=project.id, user_id=creator.id, role="developer"))
            db_session.commit()

    def test_joined_at_is_set_by_database(self, db_session: Session, make_project, creator, developer):
        project = make_project(creator)
        member = models.ProjectMember(project_id=project.id, user_id=developer.id, role="developer")
        db_session.add(member)
        db_session.commit()
        db_session.refresh(member)

        assert member.joined_at is not None

    def test_members_ordered_by_joined_at_then_id(self, db_session: Session, make_project, creator, developer, outsider):
        project = make_project(creator)
        db_session.add_all([
            models.ProjectMember(project_id=project.id, user_id=developer.id, role="developer"),
            models.ProjectMember(project_id=project.id, user_id=outsider.id, role="tutor"),
        ])
        db_session.commit()
        db_session.expire_all()

        ids = [m.id for m in db_session.get(models.Project, project.id).members]
        assert ids == sorted(ids)


class TestProjectForeignKeys:
    def test_project_with_dependents_cannot_be_deleted_directly(self, db_session: Session, make_project, creator):
        """Child foreign keys do not cascade; removing the project row alone fails."""
        project = make_project(creator)
        db_session.add(models.Task(project_id=project.id, title="Write docs"))
        db_session.commit()

        with pytest.raises(IntegrityError):
            db_session.query(models.Project).filter(models.Project.id == project.id).delete(
                synchronize_session=False
            )
            db_session.commit()
        db_session.rollback()

    def test_member_requires_existing_project(self, db_session: Session, developer):
        with pytest.raises(IntegrityError):
            db_session.add(models.ProjectMember(project_id=999, user_id=developer.id, role="developer"))
            db_session.commit()
