# tests/crud/test_crud_user.py
import pytest

from libreria.core.errors import Conflict
from libreria.crud import authenticate_user, create_user, get_user_by_email, get_user_by_id
from libreria.schemas.user import UserCreate
from libreria.models.user import User

def test_create_user_crud(db_session):
    """Test the create_user CRUD function."""
    email = "crud_test@example.com"
    user_in = UserCreate(name="Crud Tester", email=email, password="password123")

    created_user = create_user(db=db_session, user=user_in)

    assert created_user is not None
    assert created_user.email == email
    assert created_user.name == "Crud Tester"
    assert created_user.hashed_password is not None
    assert created_user.hashed_password != "password123"
    db_user = db_session.query(User).filter(User.email == email).first()
    assert db_user is not None
    assert db_user.id == created_user.id

def test_create_user_crud_duplicate(db_session):
    """A taken email is reported as a Conflict and nothing new is stored."""
    email = "crud_duplicate@example.com"
    create_user(db=db_session, user=UserCreate(name="First", email=email, password="password123"))

    with pytest.raises(Conflict):
        create_user(db=db_session, user=UserCreate(name="Second", email=email, password="anotherpassword"))

    assert db_session.query(User).filter(User.email == email).count() == 1

def test_get_user_by_email_and_id(db_session):
    user = create_user(db_session, UserCreate(name="Find Me", email="findme@example.com", password="password123"))

    assert get_user_by_email(db_session, "findme@example.com").id == user.id
    assert get_user_by_id(db_session, user.id).email == "findme@example.com"
    assert get_user_by_email(db_session, "nosuchuser@example.com") is None
    assert get_user_by_id(db_session, "nosuchid") is None

def test_authenticate_user(db_session):
    create_user(db_session, UserCreate(name="Login", email="login@example.com", password="password123"))

    assert authenticate_user(db_session, "login@example.com", "password123") is not None
    assert authenticate_user(db_session, "login@example.com", "wrongpass") is None
    assert authenticate_user(db_session, "unknown@example.com", "password123") is None

def test_authenticate_guest_without_password(db_session):
    db_session.add(User(name="Guest-1234", email="guest@example.com"))
    db_session.commit()

    assert authenticate_user(db_session, "guest@example.com", "password123") is None
