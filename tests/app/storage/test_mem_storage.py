import threading
from concurrent.futures import ThreadPoolExecutor

from resume_builder.app.schemas.resume import ResumeContent
from resume_builder.app.schemas.user import UserCreate
from resume_builder.app.storage import MemStorage, UsernameTakenError

WORKERS = 8


def _run_together(fn, count: int = WORKERS) -> list:
    """Start `count` calls of `fn` at the same moment and collect each outcome."""
    barrier = threading.Barrier(count)

    def call(index):
        barrier.wait()
        try:
            return fn(index)
        except UsernameTakenError as e:
            return e

    with ThreadPoolExecutor(max_workers=count) as pool:
        return list(pool.map(call, range(count)))


def test_concurrent_registration_of_one_username():
    """Only one of several simultaneous inserts of a username succeeds."""
    storage = MemStorage()

    outcomes = _run_together(
        lambda i: storage.create_user(UserCreate(username="alice", password=f"pw{i}")),
    )

    created = [o for o in outcomes if not isinstance(o, UsernameTakenError)]
    assert len(created) == 1
    assert sum(isinstance(o, UsernameTakenError) for o in outcomes) == WORKERS - 1
    assert len(storage.users) == 1
    assert storage.get_user_by_username("alice") == created[0]


def test_concurrent_registration_assigns_unique_ids():
    storage = MemStorage()

    users = _run_together(
        lambda i: storage.create_user(UserCreate(username=f"user{i}", password="pw")),
    )

    assert sorted(u.id for u in users) == list(range(1, WORKERS + 1))
    assert len(storage.users) == WORKERS


def test_concurrent_resume_creation_assigns_unique_ids(resume_content):
    storage = MemStorage()
    content = ResumeContent.model_validate(resume_content)
    per_worker = 25

    def create_many(i):
        return [
            storage.create_resume(i + 1, 1, f"r{n}", content).id for n in range(per_worker)
        ]

    ids = [resume_id for batch in _run_together(create_many) for resume_id in batch]

    assert sorted(ids) == list(range(1, WORKERS * per_worker + 1))
    assert len(storage.resumes) == WORKERS * per_worker
