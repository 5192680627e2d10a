import httpx
import openai

from config import Config


def openai_client_factory(config: Config) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=config.openai_base_url,
        headers={
            "Authorization": f"Bearer {config.openai_api_key}",
            "Content-Type": "application/json",
        },
        timeout=config.timeout,
    )


def openai_sdk_factory(config: Config) -> openai.AsyncClient:
    # No retries here, the user decides whether to try again.
    return openai.AsyncClient(
        api_key=config.openai_api_key,
        base_url=config.openai_base_url,
        timeout=config.timeout,
        max_retries=0,
    )
