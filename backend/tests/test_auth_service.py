"""
Tests unitaires pour le service d'authentification.
Couverture : register, login, update_profile.
"""

import uuid
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError as SchemaValidationError

from app.errors import AuthenticationError, ValidationError
from app.models.user import User, UserRole
from app.schemas.user import ProfileUpdate, UserLogin, UserRegister
from app.security import PasswordHasher
from app.services.auth_service import login, register, update_profile

hasher = PasswordHasher(rounds=4)


# --- Helpers ---

def make_stored_user(password="motdepasse123", is_active=True):
    return User(
        id=uuid.uuid4(),
        email="amira@univ.tn",
        password_hash=hasher.hash(password),
        first_name="Amira",
        last_name="Ben Salah",
        role=UserRole.STUDENT,
        is_active=is_active,
    )


def make_db(existing=None):
    db = MagicMock()
    db.execute.return_value.scalar_one_or_none.return_value = existing
    return db


def register_data(**kwargs):
    values = {
        "email": "amira@univ.tn",
        "password": "motdepasse123",
        "firstName": "Amira",
        "lastName": "Ben Salah",
        "role": "etudiant",
    }
    values.update(kwargs)
    return UserRegister(**values)


# --- Validation des schémas ---

@pytest.mark.parametrize("email", ["pas-un-email", "a..b@univ.tn", ".amira@univ.tn"])
def test_register_email_invalide_rejete(email):
    with pytest.raises(SchemaValidationError):
        register_data(email=email)


def test_register_mot_de_passe_trop_court_rejete():
    with pytest.raises(SchemaValidationError):
        register_data(password="123")


def test_register_role_inconnu_rejete():
    with pytest.raises(SchemaValidationError):
        register_data(role="admin")


def test_register_role_par_defaut_etudiant():
    data = UserRegister(
        email="amira@univ.tn",
        password="motdepasse123",
        firstName="Amira",
        lastName="Ben Salah",
    )
    assert data.role == UserRole.STUDENT


# --- register ---

def test_register_email_existant():
    db = make_db(existing=make_stored_user())

    with pytest.raises(ValidationError, match="existe déjà"):
        register(db, register_data(), hasher)

    db.add.assert_not_called()
    db.commit.assert_not_called()


def test_register_succes_mot_de_passe_hache():
    db = make_db(existing=None)

    user = register(db, register_data(role="encadrant_universitaire"), hasher)

    db.add.assert_called_once_with(user)
    db.commit.assert_called_once()
    assert user.password_hash != "motdepasse123"
    assert hasher.verify("motdepasse123", user.password_hash)
    assert user.role == UserRole.ACADEMIC_SUPERVISOR
    assert user.is_active is True


def test_register_email_conserve_la_casse_de_la_partie_locale():
    db = make_db(existing=None)
    user = register(db, register_data(email="Amira.BS@Univ.tn"), hasher)
    assert user.email == "Amira.BS@univ.tn"


# --- login ---

@pytest.mark.parametrize("payload", [{}, {"email": "amira@univ.tn"}, {"password": "x"}])
def test_login_champs_manquants(payload):
    db = make_db()
    with pytest.raises(ValidationError, match="Veuillez fournir email et mot de passe"):
        login(db, UserLogin(**payload), hasher)
    db.execute.assert_not_called()


def test_login_email_inconnu():
    db = make_db(existing=None)
    with pytest.raises(AuthenticationError, match="incorrect"):
        login(db, UserLogin(email="inconnu@univ.tn", password="motdepasse123"), hasher)


def test_login_mauvais_mot_de_passe():
    db = make_db(existing=make_stored_user())
    with pytest.raises(AuthenticationError, match="incorrect"):
        login(db, UserLogin(email="amira@univ.tn", password="mauvais"), hasher)


def test_login_compte_desactive_meme_avec_bon_mot_de_passe():
    db = make_db(existing=make_stored_user(is_active=False))
    with pytest.raises(AuthenticationError, match="Compte désactivé"):
        login(db, UserLogin(email="amira@univ.tn", password="motdepasse123"), hasher)


def test_login_succes():
    stored = make_stored_user()
    db = make_db(existing=stored)
    assert login(db, UserLogin(email="amira@univ.tn", password="motdepasse123"), hasher) is stored


# --- update_profile ---

def test_update_profile_ne_modifie_que_les_champs_fournis():
    user = make_stored_user()
    db = MagicMock()

    result = update_profile(db, user, ProfileUpdate(firstName="  Amina "))

    assert result is user
    assert user.first_name == "Amina"
    assert user.last_name == "Ben Salah"
    db.commit.assert_called_once()


def test_update_profile_nom_vide_rejete():
    with pytest.raises(SchemaValidationError):
        ProfileUpdate(lastName="   ")
