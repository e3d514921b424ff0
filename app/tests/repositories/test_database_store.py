import pytest
import pytest_asyncio
from rolodex.core.exceptions import errors
from rolodex.domain.models import UserAccount, UserProfile
from rolodex.domain.repositories.providers.database import DatabaseStore


@pytest_asyncio.fixture
async def store(tmp_path):
    database = DatabaseStore(f"sqlite+aiosqlite:///{tmp_path / 'rolodex.db'}")
    await database.connect()
    yield database
    await database.close()


class TestSQLAccountRepository:
    @pytest.mark.asyncio
    async def test_create_and_lookup(self, store):
        account = await store.accounts.create(
            UserAccount(username="alice01", email="alice@example.com", password_hash="hash")
        )

        found = await store.accounts.get_by_username("alice01")

        assert found is not None
        assert found.id == account.id
        assert (await store.accounts.get_by_email("alice@example.com")).id == account.id
        assert await store.accounts.get_by_id("missing") is None

    @pytest.mark.asyncio
    async def test_duplicate_email(self, store):
        await store.accounts.create(UserAccount(username="alice01", email="alice@example.com", password_hash="h"))

        with pytest.raises(errors.DuplicateRecordError) as exc_info:
            await store.accounts.create(UserAccount(username="bobby01", email="alice@example.com", password_hash="h"))

        assert exc_info.value.field == "email"
        assert await store.accounts.count() == 1


class TestSQLProfileRepository:
    @pytest.mark.asyncio
    async def test_list_paginates_with_ordering(self, store):
        for index in range(15):
            await store.profiles.create(UserProfile(name=f"user-{index:02d}", email=f"user{index}@example.com"))

        second_page = await store.profiles.list(offset=10, limit=10, sort_field="name", descending=False)
        first_desc = await store.profiles.list(offset=0, limit=3, sort_field="name", descending=True)

        assert [p.name for p in second_page] == [f"user-{index:02d}" for index in range(10, 15)]
        assert [p.name for p in first_desc] == ["user-14", "user-13", "user-12"]

    @pytest.mark.asyncio
    async def test_missing_values_order(self, store):
        await store.profiles.create(UserProfile(id="a", name="Ada", email="a@example.com", phone="2"))
        await store.profiles.create(UserProfile(id="b", name="Bob", email="b@example.com"))
        await store.profiles.create(UserProfile(id="c", name="Cyd", email="c@example.com", phone="1"))

        ascending = await store.profiles.list(offset=0, limit=10, sort_field="phone", descending=False)
        descending = await store.profiles.list(offset=0, limit=10, sort_field="phone", descending=True)

        assert [p.id for p in ascending] == ["c", "a", "b"]
        assert [p.id for p in descending] == ["b", "a", "c"]

    @pytest.mark.asyncio
    async def test_update_and_delete(self, store):
        profile = await store.profiles.create(UserProfile(name="Ada", email="ada@example.com"))

        updated = await store.profiles.update(profile.id, {"name": "Ada Lovelace", "phone": "555-0100"})

        assert updated.name == "Ada Lovelace"
        assert updated.email == "ada@example.com"
        assert (await store.profiles.get_by_id(profile.id)).phone == "555-0100"

        assert await store.profiles.update("missing", {"name": "x"}) is None
        assert await store.profiles.delete(profile.id) is True
        assert await store.profiles.delete(profile.id) is False

    @pytest.mark.asyncio
    async def test_health(self, store):
        assert await store.health_check() == {"status": "ok"}
