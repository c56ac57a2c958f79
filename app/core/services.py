"""
Base service layer patterns for business logic encapsulation.

Services encapsulate business logic separate from views and models.
Views handle HTTP concerns, models handle data, services handle logic.

Error handling:
    Expected failures (validation, business rules) are raised as
    subclasses of core.exceptions.BaseApplicationError, which carry an
    error code and HTTP status. Unexpected failures propagate unchanged.

Usage:
    from core.services import BaseService

    class PostService(BaseService):
        def create(self, owner, fields):
            with self.atomic():
                post = Post.objects.create(owner=owner, **fields)
            self.get_logger().info("Created post", extra={"post_id": str(post.pk)})
            return post
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from django.db import transaction

if TYPE_CHECKING:
    from collections.abc import Generator


class BaseService:
    """
    Base class for service layer classes.

    Provides:
    - Logging setup per service
    - Database transaction management

    Design Notes:
        - Collaborators (configuration, storage clients) are passed to the
          constructor instead of being read from module globals
        - Raise BaseApplicationError subclasses for expected failures
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """
        Get logger for this service.

        Returns a logger named after the service class for
        easy filtering in logs.
        """
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """
        Execute operations in a database transaction.

        If any operation in the block raises, all database changes made in
        it are rolled back.
        """
        with transaction.atomic():
            yield
