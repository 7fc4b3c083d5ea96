"""User profile API views."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from .serializers import ProfileUpdateSerializer, UserSerializer


class MeView(APIView):
    """Current user's profile; PATCH updates the accommodation profile fields."""

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):  # type: ignore
        return Response(UserSerializer(request.user).data)

    def patch(self, request):  # type: ignore
        serializer = ProfileUpdateSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response(UserSerializer(user).data)
