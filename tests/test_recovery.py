import pytest

from sleep_diary.core.exceptions import InvalidInput, NotFound, Unauthorized
from sleep_diary.services import SECURITY_QUESTIONS, RecoveryService


def test_question_resolves_from_stored_index(with_store, stores):
    async def scenario(store):
        credentials, _ = stores(store)
        await credentials.create("alice", "pass1", 2, "Paris")
        return await RecoveryService(credentials).get_question("ALICE")

    assert with_store(scenario) == SECURITY_QUESTIONS[2]


@pytest.mark.parametrize("username", ["admin", "ghost", "noanswer"])
def test_unrecoverable_accounts_are_not_found(with_store, stores, username):
    async def scenario(store):
        credentials, _ = stores(store)
        await credentials.seed_admin("admin123")
        await credentials.create("noanswer", "pass1", 0, "   ")
        recovery = RecoveryService(credentials)
        with pytest.raises(NotFound):
            await recovery.get_question(username)
        with pytest.raises(NotFound):
            await recovery.verify_and_reset(username, "anything", "newpass")

    with_store(scenario)


def test_correct_answer_resets_password(with_store, stores):
    async def scenario(store):
        credentials, _ = stores(store)
        await credentials.create("alice", "pass1", 0, "Rex")
        recovery = RecoveryService(credentials)

        with pytest.raises(Unauthorized):
            await recovery.verify_and_reset("alice", "Max", "newpass")
        with pytest.raises(InvalidInput):
            await recovery.verify_and_reset("alice", "rex", "abc")

        await recovery.verify_and_reset("alice", "  REX ", "newpass")
        user = await credentials.find_by_username("alice")
        return (
            await credentials.verify_password(user, "newpass"),
            await credentials.verify_password(user, "pass1"),
        )

    assert with_store(scenario) == (True, False)
