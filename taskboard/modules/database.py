from typing import Optional

from databases import Database

from taskboard.modules.settings import get_settings

# Create the database instance
database = Database(get_settings().database_url)


async def connect_to_db(db: Optional[Database] = None):
    await (db or database).connect()


async def disconnect_from_db(db: Optional[Database] = None):
    await (db or database).disconnect()


async def init_db(db: Optional[Database] = None):
    db = db or database

    query_users = """
    CREATE TABLE IF NOT EXISTS users (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        email TEXT UNIQUE NOT NULL,
        password TEXT NOT NULL,
        role TEXT NOT NULL DEFAULT 'Member',
        created_at TIMESTAMP WITH TIME ZONE NOT NULL,
        updated_at TIMESTAMP WITH TIME ZONE NOT NULL
    )
    """
    await db.execute(query=query_users)

    query_tasks = """
    CREATE TABLE IF NOT EXISTS tasks (
        id TEXT PRIMARY KEY,
        title TEXT NOT NULL,
        description TEXT NOT NULL,
        due_date TIMESTAMP WITH TIME ZONE,
        status TEXT NOT NULL DEFAULT 'Open',
        priority TEXT NOT NULL DEFAULT 'Medium',
        created_by TEXT NOT NULL,
        assigned_to TEXT,
        created_at TIMESTAMP WITH TIME ZONE NOT NULL,
        updated_at TIMESTAMP WITH TIME ZONE NOT NULL
    )
    """
    await db.execute(query=query_tasks)

    for stmt in (
        "CREATE INDEX IF NOT EXISTS idx_tasks_created_at ON tasks (created_at)",
        "CREATE INDEX IF NOT EXISTS idx_tasks_assigned_to ON tasks (assigned_to)",
        "CREATE INDEX IF NOT EXISTS idx_users_created_at ON users (created_at)",
    ):
        await db.execute(query=stmt)
