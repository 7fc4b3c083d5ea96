"""Register and log in participants; both answers carry a fresh JWT pair."""

from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken  # type: ignore

from .auth_serializers import LoginSerializer, RegisterSerializer
from .serializers import UserSerializer

logger = logging.getLogger(__name__)


class TokenIssuingView(APIView):
    """Validate credentials with ``serializer_class`` and answer with the user and tokens."""

    permission_classes = [AllowAny]
    serializer_class = None
    success_status = status.HTTP_200_OK

    def authenticate_user(self, serializer):
        raise NotImplementedError

    def post(self, request):  # type: ignore
        serializer = self.serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = self.authenticate_user(serializer)

        refresh = RefreshToken.for_user(user)
        payload = {
            "user": UserSerializer(user).data,
            "tokens": {"refresh": str(refresh), "access": str(refresh.access_token)},
        }
        return Response(payload, status=self.success_status)


class RegisterView(TokenIssuingView):
    serializer_class = RegisterSerializer
    success_status = status.HTTP_201_CREATED

    def authenticate_user(self, serializer):
        user = serializer.save()
        logger.info(f"Registered participant {user.pk}")
        return user


class LoginView(TokenIssuingView):
    serializer_class = LoginSerializer

    def authenticate_user(self, serializer):
        user = serializer.validated_data["user"]
        logger.info(f"User {user.pk} logged in")
        return user
