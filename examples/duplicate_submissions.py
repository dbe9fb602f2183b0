"""Example: three racing submissions of one form, one execution."""

from __future__ import annotations

import asyncio
import logging
import os

from form_once import FormOnceConfig, RequestContext, ResponseCookies, add_form_token, create_guard, fail, redirect
from form_once.exporters import create_exporter_from_env

logging.basicConfig(
    level=logging.DEBUG if os.environ.get("DEBUG", "0") == "1" else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


async def main() -> None:
    config = FormOnceConfig.from_env()
    exporter = create_exporter_from_env()
    guard = create_guard("example-signup", config=config, exporter=exporter)

    @guard
    async def subscribe(context: RequestContext):
        email = str(context.body.get("email", ""))
        await asyncio.sleep(1.0)
        if "@" not in email:
            return fail(400, {"errors": {"email": "Enter a valid address"}})
        context.cookies.set("subscribed", "1", path="/", http_only=True)
        return redirect("/thanks")

    page = RequestContext(method="GET", path="/subscribe")
    token = add_form_token(page)["token"]

    posts = [
        RequestContext(path="/subscribe", body={"email": "ada@example.com"}, cookies=ResponseCookies({config.cookie_name: token}))
        for _ in range(3)
    ]
    try:
        results = await asyncio.gather(*(subscribe(post) for post in posts))
        for post, result in zip(posts, results):
            logger.info("outcome=%s cookies=%s", result, post.cookies.writes)
    finally:
        if exporter is not None:
            await exporter.close()


if __name__ == "__main__":
    asyncio.run(main())
