from functools import lru_cache
from typing import Any, Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from xferlogic.core.path_conf import BASE_PATH


class Settings(BaseSettings):
    """全局配置"""

    model_config = SettingsConfigDict(
        env_file=f'{BASE_PATH}/.env',
        env_file_encoding='utf-8',
        extra='ignore',
        case_sensitive=True,
    )

    # .env 当前环境
    ENVIRONMENT: Literal['dev', 'prod'] = 'dev'

    # FastAPI
    FASTAPI_API_PATH: str = '/api'
    FASTAPI_TITLE: str = 'XferLogic'
    FASTAPI_DESCRIPTION: str = 'XferLogic AI gateway and document conversion backend'
    FASTAPI_DOCS_URL: str | None = '/docs'
    FASTAPI_REDOC_URL: str | None = '/redoc'
    FASTAPI_OPENAPI_URL: str | None = '/openapi'

    # .env 数据库
    DATABASE_TYPE: Literal['postgresql', 'sqlite'] = 'postgresql'
    DATABASE_HOST: str = '127.0.0.1'
    DATABASE_PORT: int = 5432
    DATABASE_USER: str = 'postgres'
    DATABASE_PASSWORD: str = ''

    # 数据库
    DATABASE_ECHO: bool | Literal['debug'] = False
    DATABASE_SCHEMA: str = 'xferlogic'
    DATABASE_SQLITE_PATH: str = f'{BASE_PATH}/xferlogic.sqlite3'

    # .env Token
    TOKEN_SECRET_KEY: str  # 密钥 secrets.token_urlsafe(32)

    # Token
    TOKEN_ALGORITHM: str = 'HS256'
    TOKEN_EXPIRE_SECONDS: int = 60 * 60 * 24 * 7  # 7 天

    # 用户安全
    USER_PASSWORD_BCRYPT_ROUNDS: int = 10

    # CORS
    CORS_ALLOWED_ORIGINS: list[str] = ['*']
    MIDDLEWARE_CORS: bool = True

    # 请求限制
    REQUEST_BODY_MAX_SIZE: int = 20 * 1024 * 1024  # 20 MB

    # 时间配置
    DATETIME_TIMEZONE: str = 'UTC'
    DATETIME_FORMAT: str = '%Y-%m-%d %H:%M:%S'

    # 日志
    LOG_FORMAT: str = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
    LOG_STD_LEVEL: str = 'INFO'

    ##################################################
    # [ Module ] Gateway - text / image providers
    ##################################################

    # --------------------------------------------------------------------------
    # OpenAI Configuration (text: responses API, image: images API)
    # --------------------------------------------------------------------------
    OPENAI_API_KEY: str = ''
    OPENAI_MODEL: str = 'gpt-4.1'
    OPENAI_BASE_URL: str = ''  # Optional: Custom base URL for proxies/emulators
    OPENAI_IMAGE_MODEL: str = 'gpt-image-1'
    OPENAI_IMAGE_SIZE: str = '1024x1024'

    # --------------------------------------------------------------------------
    # Anthropic Configuration (text: messages API)
    # --------------------------------------------------------------------------
    ANTHROPIC_API_KEY: str = ''
    ANTHROPIC_MODEL: str = 'claude-3-sonnet-20240229'
    ANTHROPIC_MAX_TOKENS: int = 1500

    # --------------------------------------------------------------------------
    # Usage cost estimation (USD)
    # --------------------------------------------------------------------------
    OPENAI_COST_PER_TOKEN: float = 0.00001
    ANTHROPIC_COST_PER_TOKEN: float = 0.000015
    ANTHROPIC_PLACEHOLDER_TOKENS: int = 500  # used when the response carries no usage block
    IMAGE_COST_PER_CALL: float = 0.04

    # Usage recording policy: 'sync' awaits the write, 'background' writes after the response
    USAGE_RECORD_MODE: Literal['sync', 'background'] = 'sync'

    @model_validator(mode='before')
    @classmethod
    def check_env(cls, values: Any) -> Any:
        """检查环境变量"""
        if values.get('ENVIRONMENT') == 'prod':
            # FastAPI
            values['FASTAPI_DOCS_URL'] = None
            values['FASTAPI_REDOC_URL'] = None
            values['FASTAPI_OPENAPI_URL'] = None

        return values


@lru_cache
def get_settings() -> Settings:
    """获取全局配置单例"""
    return Settings()


# 创建全局配置实例
settings = get_settings()
