import sqlalchemy as sa
from sqlalchemy.future import select

from backend.models.task import Task
from backend.models.user import User


async def test_password_is_hashed_on_first_save(database):
    async with database.session() as session:
        user = User(name="Jo", email="jo@x.com", password="secret1")
        session.add(user)
        await session.commit()

        assert user.id
        assert user.password != "secret1"
        assert user.match_password("secret1")
        assert "password" not in user.to_dict()


async def test_password_rehashed_only_when_changed(database):
    async with database.session() as session:
        user = User(name="Jo", email="jo@x.com", password="secret1")
        session.add(user)
        await session.commit()
        original_hash = user.password

        user.name = "Joanna"
        await session.commit()
        assert user.password == original_hash

        user.password = "another1"
        await session.commit()
        assert user.password != "another1"
        assert user.match_password("another1")
        assert not user.match_password("secret1")


async def test_task_defaults(database):
    async with database.session() as session:
        user = User(name="Jo", email="jo@x.com", password="secret1")
        session.add(user)
        await session.commit()

        task = Task(title="T1", user_id=user.id)
        session.add(task)
        await session.commit()

        stored = (await session.execute(select(Task).filter_by(id=task.id))).scalars().one()
        assert stored.status == "pending"
        assert stored.description is None
        assert stored.created_at is not None
        assert stored.is_owned_by(user.id)
        assert stored.to_dict()["user"] == user.id


def test_free_text_columns_have_no_length_limit():
    for column in (Task.__table__.c.title, User.__table__.c.name, User.__table__.c.email):
        assert isinstance(column.type, sa.Text)
        assert column.type.length is None
