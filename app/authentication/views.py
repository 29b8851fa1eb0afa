"""
Authentication views.

This module provides API views for:
- Registration and username/password login (JWT pair)
- Token refresh (simplejwt rotation) and logout (refresh token blacklist)
- Current profile read/update, username change, password change
- User directory

Related files:
    - serializers.py: Request/response serialization
    - services.py: Business logic (AccountService)
    - urls.py: URL routing

Response format:
    Every endpoint answers with the ServiceResult envelope:
    {"success": true, "data": ..., "message": ...} or
    {"success": false, "error": ..., "error_code": ...}
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.serializers import (
    CurrentUserSerializer,
    LoginResponseSerializer,
    LoginSerializer,
    LogoutSerializer,
    PasswordChangeSerializer,
    ProfileUpdateSerializer,
    RegisterSerializer,
    UsernameChangeSerializer,
    UserSerializer,
)
from authentication.services import AccountService
from core.views import invalid_request_response, result_response


# =============================================================================
# Registration & Sessions
# =============================================================================


class RegisterView(APIView):
    """
    POST: Create an account

    URL: /api/v1/auth/register/
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        operation_id="auth_register",
        summary="Register",
        description="Create an account. Username must be 3-30 characters of letters, digits, '_' or '-'.",
        tags=["Auth"],
        request=RegisterSerializer,
        responses={201: CurrentUserSerializer},
    )
    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request_response(serializer)

        result = AccountService.register(**serializer.validated_data)
        return result_response(
            result,
            data=CurrentUserSerializer(result.data).data if result else None,
            success_status=status.HTTP_201_CREATED,
        )


class LoginView(APIView):
    """
    POST: Log in with username and password

    URL: /api/v1/auth/login/

    Returns the user's profile and a JWT access/refresh pair.
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        operation_id="auth_login",
        summary="Log in",
        tags=["Auth"],
        request=LoginSerializer,
        responses={200: LoginResponseSerializer},
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request_response(serializer)

        result = AccountService.login(**serializer.validated_data)
        data = None
        if result:
            data = {
                "user": CurrentUserSerializer(result.data["user"]).data,
                "tokens": result.data["tokens"],
            }
        return result_response(result, data=data)


class LogoutView(APIView):
    """
    POST: Blacklist the given refresh token

    URL: /api/v1/auth/logout/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="auth_logout",
        summary="Log out",
        description="Revoke the refresh token of the current session.",
        tags=["Auth"],
        request=LogoutSerializer,
    )
    def post(self, request):
        serializer = LogoutSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request_response(serializer)

        result = AccountService.logout(request.user, serializer.validated_data["refresh"])
        return result_response(result)


# =============================================================================
# Profile & Account Management
# =============================================================================


class MeView(APIView):
    """
    GET: Current user's profile
    PATCH: Update email, phone, status, profile_pic, description

    URL: /api/v1/auth/me/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="auth_me_retrieve",
        summary="Get current profile",
        tags=["Auth - Profile"],
        responses={200: CurrentUserSerializer},
    )
    def get(self, request):
        return Response(
            {"success": True, "data": CurrentUserSerializer(request.user).data}
        )

    @extend_schema(
        operation_id="auth_me_update",
        summary="Update current profile",
        tags=["Auth - Profile"],
        request=ProfileUpdateSerializer,
        responses={200: CurrentUserSerializer},
    )
    def patch(self, request):
        serializer = ProfileUpdateSerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return invalid_request_response(serializer)

        result = AccountService.update_profile(request.user, **serializer.validated_data)
        return result_response(
            result,
            data=CurrentUserSerializer(result.data).data if result else None,
        )


class UsernameChangeView(APIView):
    """
    POST: Change username

    URL: /api/v1/auth/me/username/

    Direct conversations follow the new name. Access tokens stay valid
    (they carry the user id, not the username).
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="auth_username_change",
        summary="Change username",
        tags=["Auth - Profile"],
        request=UsernameChangeSerializer,
        responses={200: CurrentUserSerializer},
    )
    def post(self, request):
        serializer = UsernameChangeSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request_response(serializer)

        result = AccountService.change_username(
            request.user, serializer.validated_data["username"]
        )
        return result_response(
            result,
            data=CurrentUserSerializer(result.data).data if result else None,
        )


class PasswordChangeView(APIView):
    """
    POST: Change password

    URL: /api/v1/auth/me/password/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="auth_password_change",
        summary="Change password",
        tags=["Auth - Profile"],
        request=PasswordChangeSerializer,
    )
    def post(self, request):
        serializer = PasswordChangeSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request_response(serializer)

        result = AccountService.change_password(request.user, **serializer.validated_data)
        return result_response(result, data={} if result else None)


class UserListView(APIView):
    """
    GET: List every active user

    URL: /api/v1/auth/users/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="auth_users_list",
        summary="List users",
        tags=["Auth - Users"],
        responses={200: UserSerializer(many=True)},
    )
    def get(self, request):
        users = AccountService.list_users()
        return Response(
            {"success": True, "data": UserSerializer(users, many=True).data}
        )
