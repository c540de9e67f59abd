# nulltask/db/seed.py
import asyncio
import random
from datetime import datetime, timedelta, timezone

from faker import Faker
from tqdm import tqdm

from nulltask.core.config import settings
from nulltask.core.exceptions import EmailAlreadyRegistered
from nulltask.core.logging import get_logger
from nulltask.core.security import hash_password
from nulltask.db.session import close_db_pool, create_db_pool
from nulltask.repositories.user_repo import UserRepository

fake = Faker()
logger = get_logger("nulltask.seed")

NUM_USERS = 50
MIN_TASKS_PER_USER = 0
MAX_TASKS_PER_USER = 5
SEED_PASSWORD = "nulltask123"


async def insert_task(conn, user_id, title: str, description: str, due_date: datetime):
    sql = """
    INSERT INTO tasks (title, description, status, due_date, user_id)
    VALUES ($1, $2, 'pending', $3, $4)
    RETURNING id;
    """
    rec = await conn.fetchrow(sql, title, description, due_date, user_id)
    return rec["id"]


def random_due_date(days: int = 30) -> datetime:
    now = datetime.now(tz=timezone.utc)
    return now + timedelta(seconds=random.randint(3600, days * 86400))


async def seed():
    pool = await create_db_pool(settings, logger)
    # hashing once keeps the run fast; every seeded user shares the password
    hashed_password = hash_password(SEED_PASSWORD)

    try:
        async with pool.acquire() as conn:
            repo = UserRepository(conn, logger=logger)
            created = 0
            tasks = 0

            for _ in tqdm(range(NUM_USERS), desc="Seeding users"):
                try:
                    user = await repo.create({
                        "name": fake.name(),
                        "email": fake.unique.email(),
                        "password": hashed_password,
                        "age": random.randint(18, 80),
                    })
                except EmailAlreadyRegistered:
                    continue
                created += 1

                for _ in range(random.randint(MIN_TASKS_PER_USER, MAX_TASKS_PER_USER)):
                    await insert_task(
                        conn,
                        user["id"],
                        fake.sentence(nb_words=4).rstrip("."),
                        fake.paragraph(nb_sentences=2),
                        random_due_date(),
                    )
                    tasks += 1

            logger.info("Seed finished: %d users, %d tasks.", created, tasks)
    finally:
        await close_db_pool(pool, logger)


if __name__ == "__main__":
    asyncio.run(seed())
