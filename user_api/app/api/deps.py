"""Dependencies resolving the components wired up by ``create_app``."""

import logging

from fastapi import Request

from user_api.app.services.user_service import UserService


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_handler_logger(request: Request) -> logging.Logger:
    return request.app.state.handler_logger
