from enum import Enum
from pathlib import Path

from pydantic_settings import BaseSettings


DEFAULT_USUAL_INGREDIENTS = "卵, 醤油, 酒, みりん, 砂糖, 油"


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


class Config(BaseSettings):
    env: Env = Env.local
    html_dir: Path = Path("assets/html")
    openai_api_key: str | None = None
    openai_base_url: str = "https://api.openai.com/v1/"
    core_model: str = "gpt-4o"
    vision_model: str = "gpt-4o"
    max_tokens: int = 3000
    timeout: float = 60 * 2
    usual_ingredients: str = DEFAULT_USUAL_INGREDIENTS
    log_level: str = "INFO"
