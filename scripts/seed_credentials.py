from __future__ import annotations

import argparse

from avito_relay.core.config import load_settings
from avito_relay.crud.messaging_integration import create_integration
from avito_relay.crud.user_credential import create_credential
from avito_relay.db.session import create_engine_from_settings, create_session_maker


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Register Avito API credentials (and optionally an integration)"
    )
    p.add_argument("--user-id", required=True)
    p.add_argument("--api-key", required=True)
    p.add_argument("--api-url", default="")
    p.add_argument("--webhook-secret", default="")
    p.add_argument("--integration-name", default="")
    p.add_argument("--phone", default="")
    return p.parse_args(argv)


async def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)

    settings = load_settings()
    engine = create_engine_from_settings(settings)
    session_maker = create_session_maker(engine)

    try:
        async with session_maker() as session:
            cred = await create_credential(
                session=session,
                user_id=args.user_id.strip(),
                api_key=args.api_key.strip(),
                api_url=args.api_url.strip() or None,
                webhook_secret=args.webhook_secret.strip() or None,
            )
            print("Credentials created")
            print(f"credential_id={cred.id}")

            name = args.integration_name.strip()
            if name:
                integ = await create_integration(
                    session=session,
                    user_id=cred.user_id,
                    credential_id=cred.id,
                    name=name,
                    phone=args.phone.strip() or None,
                )
                print("Integration created")
                print(f"integration_id={integ.id}")
    finally:
        await engine.dispose()


if __name__ == "__main__":
    import asyncio

    asyncio.run(main())
