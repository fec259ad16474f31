#!/usr/bin/env python3
"""Create the admin panel tables and a first backend user.

Usage:
    python scripts/bootstrap_admin.py --email admin@example.com --name Admin

The user gets the highest configured role and a generated password that
must be changed on first login.
"""

import argparse
import asyncio
import sys
from pathlib import Path

from sqlmodel import SQLModel

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from admin_panel.adapter.services.unit_of_work import SqlAlchemyUnitOfWork  # noqa: E402
from admin_panel.app.services.passwords import hash_password, random_alphanumeric  # noqa: E402
from admin_panel.config import load_config  # noqa: E402
from admin_panel.depends import create_session_factory  # noqa: E402
from admin_panel.domain.entities import BackendUser  # noqa: E402


async def bootstrap(email: str, name: str) -> int:
    config = load_config()
    session_factory = create_session_factory(config)

    engine = session_factory.kw["bind"]
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async with session_factory() as session:
        uow = SqlAlchemyUnitOfWork(session)
        async with uow:
            if await uow.backend_users.get_by_email(email) is not None:
                print(f"Backend user {email} already exists")
                return 0

            password = random_alphanumeric(12)
            user = await uow.backend_users.create(
                BackendUser(
                    name=name,
                    email=email,
                    password_hash=hash_password(password),
                    role=config.ROLES[-1],
                    should_reset_password=True,
                )
            )
            await uow.commit()

    await engine.dispose()
    print(f"Created backend user {email} (id: {user.id}) with password: {password}")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Bootstrap the first backend user")
    parser.add_argument("--email", required=True)
    parser.add_argument("--name", default="Admin")
    args = parser.parse_args()
    return asyncio.run(bootstrap(args.email, args.name))


if __name__ == "__main__":
    sys.exit(main())
