from rest_framework import status
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import AllowAny
from rest_framework_simplejwt.tokens import RefreshToken

from .serializers import RegisterSerializer, LoginSerializer, UserSerializer


class TokenIssuingView(APIView):
    """Validates credentials with ``serializer_class`` and answers with the user and a JWT pair."""
    permission_classes = (AllowAny,)
    authentication_classes = []

    serializer_class = None
    success_message = ""
    success_status = status.HTTP_200_OK

    def authenticate(self, serializer):
        return serializer.validated_data

    def post(self, request):
        serializer = self.serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = self.authenticate(serializer)

        refresh = RefreshToken.for_user(user)
        return Response({
            "message": self.success_message,
            "user": UserSerializer(user).data,
            "tokens": {"refresh": str(refresh), "access": str(refresh.access_token)},
        }, status=self.success_status)


class RegisterView(TokenIssuingView):
    """
    POST {username, email, password, role: customer|driver, phone_number, vehicle_number?}

    Drivers get an offline DriverProfile straight away.
    """
    serializer_class = RegisterSerializer
    success_message = "User registered successfully"
    success_status = status.HTTP_201_CREATED

    def authenticate(self, serializer):
        return serializer.save()


class LoginView(TokenIssuingView):
    serializer_class = LoginSerializer
    success_message = "Login successful"
