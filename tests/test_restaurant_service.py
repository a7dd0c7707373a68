"""Restaurant registration, login and listing."""

import pytest

from core.exceptions import ConflictError, UnauthorizedError, ValidationError
from core.security import resolve_restaurant_id
from models.restaurant import RestaurantLogin, RestaurantRegister
import services.restaurant_service as restaurant_service
from services.restaurant_service import list_restaurants, login_restaurant, register_restaurant


class TestRegister:
    @pytest.mark.asyncio
    async def test_register_returns_token_and_id(self, mongo, register):
        result = await register()

        assert result["access_token"]
        assert result["token_type"] == "bearer"
        stored = await mongo.restaurants_collection.find_one({"name": "Bistro"})
        assert str(stored["_id"]) == result["id"]
        assert stored["access_token"] == result["access_token"]

    @pytest.mark.asyncio
    async def test_password_is_stored_hashed(self, mongo, register):
        await register(password="secret1")

        stored = await mongo.restaurants_collection.find_one({"name": "Bistro"})
        assert "password" not in stored
        assert stored["password_hash"] != "secret1"

    @pytest.mark.asyncio
    async def test_duplicate_name_conflicts(self, register):
        await register(name="Bistro", external_ref="X1")

        with pytest.raises(ConflictError):
            await register(name="Bistro", external_ref="X2")

    @pytest.mark.asyncio
    async def test_duplicate_external_ref_conflicts(self, register):
        await register(name="Bistro", external_ref="X1")

        with pytest.raises(ConflictError):
            await register(name="Trattoria", external_ref="X1")

    @pytest.mark.asyncio
    async def test_each_registration_gets_its_own_token(self, register):
        first = await register(name="Bistro")
        second = await register(name="Trattoria")

        assert first["access_token"] != second["access_token"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "fields",
        [
            {"external_ref": "X1", "name": "", "password": "secret1"},
            {"external_ref": "X1", "name": "Bistro", "password": "short"},
            {"external_ref": "", "name": "Bistro", "password": "secret1"},
        ],
    )
    async def test_invalid_registration(self, mongo, fields):
        with pytest.raises(ValidationError):
            await register_restaurant(mongo, RestaurantRegister(**fields))

        assert await mongo.restaurants_collection.count_documents({}) == 0


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_returns_registration_token(self, mongo, register):
        registered = await register(name="Bistro", password="secret1")

        result = await login_restaurant(mongo, RestaurantLogin(name="Bistro", password="secret1"))

        assert result["access_token"] == registered["access_token"]
        assert result["id"] == registered["id"]

    @pytest.mark.asyncio
    async def test_wrong_password_is_unauthorized(self, mongo, register):
        await register(name="Bistro", password="secret1")

        with pytest.raises(UnauthorizedError):
            await login_restaurant(mongo, RestaurantLogin(name="Bistro", password="secret2"))

    @pytest.mark.asyncio
    async def test_unknown_restaurant_is_unauthorized(self, mongo):
        with pytest.raises(UnauthorizedError):
            await login_restaurant(mongo, RestaurantLogin(name="Nowhere", password="secret1"))

    @pytest.mark.asyncio
    async def test_empty_fields_are_invalid(self, mongo):
        with pytest.raises(ValidationError):
            await login_restaurant(mongo, RestaurantLogin(name="", password=""))


class TestListRestaurants:
    @pytest.mark.asyncio
    async def test_listing_hides_credentials(self, mongo, register):
        await register(name="Bistro", auto_confirm=True)
        await register(name="Trattoria")

        listed = await list_restaurants(mongo)

        assert [r["name"] for r in listed] == ["Bistro", "Trattoria"]
        assert listed[0]["auto_confirm"] is True
        for item in listed:
            assert set(item) == {"id", "name", "external_ref", "auto_confirm", "created_at"}


class TestTokenValidator:
    @pytest.mark.asyncio
    async def test_token_resolves_to_owner(self, mongo, register):
        registered = await register()

        restaurant_id = await resolve_restaurant_id(mongo, registered["access_token"])

        assert str(restaurant_id) == registered["id"]

    @pytest.mark.asyncio
    async def test_unknown_token_is_unauthorized(self, mongo, register):
        await register()

        with pytest.raises(UnauthorizedError):
            await resolve_restaurant_id(mongo, "not-a-token")


class TestPasswordHashingOffLoop:
    @pytest.mark.asyncio
    async def test_register_and_login_hash_in_threadpool(self, mongo, monkeypatch):
        calls = []
        real_run_in_threadpool = restaurant_service.run_in_threadpool

        async def recording_run_in_threadpool(func, *args, **kwargs):
            calls.append(func.__name__)
            return await real_run_in_threadpool(func, *args, **kwargs)

        monkeypatch.setattr(restaurant_service, "run_in_threadpool", recording_run_in_threadpool)

        await register_restaurant(mongo, RestaurantRegister(external_ref="X1", name="Bistro", password="secret1"))
        await login_restaurant(mongo, RestaurantLogin(name="Bistro", password="secret1"))

        assert calls == ["hash_password", "verify_password"]
