# tests/test_store_memory.py
import asyncio

import pytest

from futurehire.core.errors import DuplicateIdentity, IdentityNotFound
from futurehire.models.identity import Identity, TestAttempt


@pytest.mark.asyncio
async def test_create_and_find(store):
    created = await store.create("Alice", "A@X.com ", "9999", "hashed")
    assert created.id
    assert created.email == "a@x.com"
    assert created.test_history == []
    assert created.resume_analysis is None

    by_email = await store.find_by_email("a@X.COM")
    by_id = await store.find_by_id(created.id)
    assert by_email == by_id == created
    assert await store.find_by_id("missing") is None
    assert await store.find_by_email("nobody@x.com") is None

@pytest.mark.asyncio
async def test_duplicate_email_is_rejected(store):
    await store.create("Alice", "a@x.com", None, "hashed")
    with pytest.raises(DuplicateIdentity):
        await store.create("Alice Again", "A@x.com", None, "hashed2")

@pytest.mark.asyncio
async def test_concurrent_signups_yield_exactly_one_identity(store):
    results = await asyncio.gather(
        *[store.create(f"user{i}", "race@x.com", None, "hashed") for i in range(20)],
        return_exceptions=True,
    )
    created = [r for r in results if isinstance(r, Identity)]
    conflicts = [r for r in results if isinstance(r, DuplicateIdentity)]
    assert len(created) == 1
    assert len(conflicts) == 19

@pytest.mark.asyncio
async def test_empty_password_hash_is_refused(store):
    with pytest.raises(ValueError):
        await store.create("Alice", "a@x.com", None, "")

@pytest.mark.asyncio
async def test_concurrent_appends_are_not_lost(store):
    ident = await store.create("Alice", "a@x.com", None, "hashed")
    attempts = [TestAttempt(test_id=f"t{i}", result={"score": i}) for i in range(50)]
    await asyncio.gather(*[store.append_test_attempt(ident.id, a) for a in attempts])

    history = (await store.find_by_id(ident.id)).test_history
    assert len(history) == 50
    assert {a.test_id for a in history} == {f"t{i}" for i in range(50)}

@pytest.mark.asyncio
async def test_history_keeps_insertion_order(store):
    ident = await store.create("Alice", "a@x.com", None, "hashed")
    for i in range(3):
        await store.append_test_attempt(ident.id, TestAttempt(test_id=f"t{i}"))
    history = (await store.find_by_id(ident.id)).test_history
    assert [a.test_id for a in history] == ["t0", "t1", "t2"]

@pytest.mark.asyncio
async def test_concurrent_replace_leaves_one_full_analysis(store):
    ident = await store.create("Alice", "a@x.com", None, "hashed")
    first = {"skills": ["Python"], "suggestions": ["a", "b"]}
    second = {"skills": ["Go", "Rust"], "weakPoints": ["c"]}
    await asyncio.gather(
        store.replace_resume_analysis(ident.id, first),
        store.replace_resume_analysis(ident.id, second),
    )
    stored = (await store.find_by_id(ident.id)).resume_analysis
    assert stored in (first, second)

@pytest.mark.asyncio
async def test_replace_is_wholesale(store):
    ident = await store.create("Alice", "a@x.com", None, "hashed")
    await store.replace_resume_analysis(ident.id, {"skills": ["Python"], "projects": ["x"]})
    await store.replace_resume_analysis(ident.id, {"skills": ["Go"]})
    assert (await store.find_by_id(ident.id)).resume_analysis == {"skills": ["Go"]}

@pytest.mark.asyncio
async def test_mutating_unknown_identity(store):
    with pytest.raises(IdentityNotFound):
        await store.append_test_attempt("missing", TestAttempt(test_id="t1"))
    with pytest.raises(IdentityNotFound):
        await store.replace_resume_analysis("missing", {})

@pytest.mark.asyncio
async def test_readers_get_copies(store):
    ident = await store.create("Alice", "a@x.com", None, "hashed")
    analysis = {"skills": ["Python"]}
    await store.replace_resume_analysis(ident.id, analysis)
    analysis["skills"].append("leaked")

    copy = await store.find_by_id(ident.id)
    copy.test_history.append(TestAttempt(test_id="local-only"))
    copy.resume_analysis["skills"].append("also-leaked")

    fresh = await store.find_by_id(ident.id)
    assert fresh.test_history == []
    assert fresh.resume_analysis == {"skills": ["Python"]}
