"""
API views for posts.

Provides:
- PostViewSet: Create, list, retrieve, approve and delete posts
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from django.shortcuts import get_object_or_404
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ParseError
from rest_framework.permissions import AllowAny, IsAdminUser, IsAuthenticated
from rest_framework.response import Response

from core.exceptions import BaseApplicationError
from media.conf import get_ingestion_config
from media.exceptions import MalformedRequestError, MediaErrorCode
from posts.models import Post
from posts.serializers import PostCreateRequestSerializer, PostSerializer
from posts.services import PostAssemblyService, PostModerationService

logger = logging.getLogger(__name__)


class PostViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    Posts API.

    GET    /api/v1/posts/               - List approved posts (staff see all)
    POST   /api/v1/posts/               - Create a post from uploaded file keys
    GET    /api/v1/posts/{id}/          - Get a post
    DELETE /api/v1/posts/{id}/          - Delete a post (owner or staff)
    POST   /api/v1/posts/{id}/approve/  - Approve a post (staff only)

    Create request:
        JSON object with the post fields in camelCase plus
        ``filesPath``: the keys returned by the media upload endpoint.

    Create response:
        200 OK: The committed post
        400 Bad Request: FILE_NOT_FOUND, INVALID_FILE_MIME_TYPE,
            INVALID_PICS_NUM, INVALID_VIDS_NUM, INVALID_POST or
            MALFORMED_REQUEST_BODY
        500 Internal Server Error: Store or database failure
    """

    serializer_class = PostSerializer

    def get_permissions(self):
        if self.action in ("list", "retrieve"):
            return [AllowAny()]
        if self.action == "approve":
            return [IsAdminUser()]
        return [IsAuthenticated()]

    def get_queryset(self):
        queryset = Post.objects.select_related("owner")
        user = self.request.user
        if user.is_staff:
            return queryset
        if self.action == "list" or not user.is_authenticated:
            return queryset.filter(is_approved=True)
        # Owners can still open their own unapproved posts
        return queryset.filter(is_approved=True) | queryset.filter(owner=user)

    def create(self, request, *args, **kwargs):
        try:
            body = request.data
        except ParseError:
            body = None

        try:
            if not isinstance(body, Mapping):
                raise MalformedRequestError("Request body must be a JSON object")

            request_serializer = PostCreateRequestSerializer(data=body)
            if not request_serializer.is_valid():
                raise MalformedRequestError(
                    "filesPath must be a list of file keys",
                    details=dict(request_serializer.errors),
                )

            service = PostAssemblyService.from_config(get_ingestion_config())
            post = service.create_post(
                owner=request.user,
                fields=body,
                keys=request_serializer.validated_data["filesPath"],
            )
        except BaseApplicationError as e:
            return Response(e.to_dict(), status=e.http_status)
        except Exception:
            logger.exception(
                "Error while creating post",
                extra={"user_id": str(request.user.pk)},
            )
            return Response(
                {
                    "error": "Internal server error",
                    "error_code": MediaErrorCode.SERVER_ERROR.value,
                },
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(PostSerializer(post).data, status=status.HTTP_200_OK)

    def destroy(self, request, *args, **kwargs):
        post = self.get_object()
        if post.owner_id != request.user.pk and not request.user.is_staff:
            return Response(
                {"error": "You can only delete your own posts", "error_code": "FORBIDDEN"},
                status=status.HTTP_403_FORBIDDEN,
            )
        PostModerationService.delete(post)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["post"], url_path="approve")
    def approve(self, request, pk=None):
        post = get_object_or_404(Post, pk=pk)
        PostModerationService.approve(post)
        return Response(PostSerializer(post).data)
