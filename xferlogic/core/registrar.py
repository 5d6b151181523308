import logging

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from xferlogic import __version__
from xferlogic.common.exception.exception_handler import register_exception
from xferlogic.common.log import setup_logging
from xferlogic.core.conf import settings
from xferlogic.middleware.request_limit_middleware import RequestBodyLimitMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def register_init(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    启动初始化

    :param app: FastAPI 应用实例
    :return:
    """
    logger.info(f'{settings.FASTAPI_TITLE} v{__version__} started ({settings.ENVIRONMENT})')

    yield

    logger.info(f'{settings.FASTAPI_TITLE} shutting down')


def register_app() -> FastAPI:
    """注册 FastAPI 应用"""
    app = FastAPI(
        title=settings.FASTAPI_TITLE,
        version=__version__,
        description=settings.FASTAPI_DESCRIPTION,
        docs_url=settings.FASTAPI_DOCS_URL,
        redoc_url=settings.FASTAPI_REDOC_URL,
        openapi_url=settings.FASTAPI_OPENAPI_URL,
        lifespan=register_init,
    )

    # 注册组件
    register_logger()
    register_middleware(app)
    register_router(app)
    register_exception(app)

    return app


def register_logger() -> None:
    """注册日志"""
    setup_logging()


def register_middleware(app: FastAPI) -> None:
    """
    注册中间件（执行顺序从下往上）

    :param app: FastAPI 应用实例
    :return:
    """

    # 请求体大小限制
    app.add_middleware(RequestBodyLimitMiddleware)

    # CORS
    if settings.MIDDLEWARE_CORS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.CORS_ALLOWED_ORIGINS,
            allow_credentials=True,
            allow_methods=['*'],
            allow_headers=['*'],
        )


def register_router(app: FastAPI) -> None:
    """
    路由

    :param app: FastAPI 应用实例
    :return:
    """
    from xferlogic.app.router import router

    app.include_router(router)
