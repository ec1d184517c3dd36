from uuid import UUID, uuid4

import pytest

from src.auth.dependencies import get_optional_user
from src.auth.dtos import InvalidCredentialsError, RoleSlug, UserNotFoundError
from src.auth.features.change_password.router import get_change_password_write_model
from src.auth.features.change_password.write_model import ChangePasswordWriteModel
from src.auth.urls import CHANGE_PASSWORD_URL


class InMemoryChangePasswordWriteModel(ChangePasswordWriteModel):
    def __init__(self, passwords: dict[UUID, str]):
        self.passwords = passwords

    async def change_password(self, user_id: UUID, current_password: str, new_password: str) -> None:
        if user_id not in self.passwords:
            raise UserNotFoundError("User not found or password not set.")
        if self.passwords[user_id] != current_password:
            raise InvalidCredentialsError()
        self.passwords[user_id] = new_password


VALID_CHANGE = {"current_password": "oldpassword", "new_password": "newpassword", "confirm_password": "newpassword"}


@pytest.fixture
def host(user_factory):
    return user_factory(RoleSlug.HOST)


async def change(client_factory, write_model, user, user_id, payload):
    overrides = {get_change_password_write_model: lambda: write_model, get_optional_user: lambda: user}
    async with client_factory(overrides) as client:
        return await client.post(CHANGE_PASSWORD_URL.format(user_id=user_id), json=payload)


@pytest.mark.asyncio
async def test_change_password(client_factory, host):
    write_model = InMemoryChangePasswordWriteModel({host.id: "oldpassword"})

    response = await change(client_factory, write_model, host, host.id, VALID_CHANGE)

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Password changed successfully."}
    assert write_model.passwords[host.id] == "newpassword"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload, message",
    [
        ({**VALID_CHANGE, "current_password": ""}, "All password fields are required."),
        ({**VALID_CHANGE, "confirm_password": "different1"}, "New password and confirmation do not match."),
        (
            {**VALID_CHANGE, "new_password": "short", "confirm_password": "short"},
            "Password must be at least 8 characters long.",
        ),
    ],
)
async def test_invalid_input(client_factory, host, payload, message):
    write_model = InMemoryChangePasswordWriteModel({host.id: "oldpassword"})

    response = await change(client_factory, write_model, host, host.id, payload)

    assert response.status_code == 400
    assert response.json()["error"] == message
    assert write_model.passwords[host.id] == "oldpassword"


@pytest.mark.asyncio
async def test_wrong_current_password(client_factory, host):
    write_model = InMemoryChangePasswordWriteModel({host.id: "somethingelse"})

    response = await change(client_factory, write_model, host, host.id, VALID_CHANGE)

    assert response.status_code == 401
    assert response.json()["error"] == "Current password is incorrect."


@pytest.mark.asyncio
async def test_user_without_password(client_factory, host):
    response = await change(client_factory, InMemoryChangePasswordWriteModel({}), host, host.id, VALID_CHANGE)

    assert response.status_code == 404
    assert response.json()["error"] == "User not found or password not set."


@pytest.mark.asyncio
async def test_cannot_change_another_users_password(client_factory, host):
    other_id = uuid4()
    write_model = InMemoryChangePasswordWriteModel({other_id: "oldpassword"})

    response = await change(client_factory, write_model, host, other_id, VALID_CHANGE)

    assert response.status_code == 403
    assert write_model.passwords[other_id] == "oldpassword"


@pytest.mark.asyncio
async def test_requires_sign_in(client_factory, host):
    response = await change(client_factory, InMemoryChangePasswordWriteModel({}), None, host.id, VALID_CHANGE)

    assert response.status_code == 401
