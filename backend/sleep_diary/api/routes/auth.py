import logging
from fastapi import APIRouter, Depends

from ..schemas import (
    RegisterRequest,
    LoginRequest,
    SessionResponse,
    RecoverQuestionRequest,
    RecoverQuestionResponse,
    RecoverVerifyRequest,
    ChangePasswordRequest,
    SecurityQuestionsResponse,
    OkResponse
)
from ...auth.dependencies import (
    get_auth_service,
    get_current_user,
    get_recovery_service
)
from ...services import (
    AuthenticationService,
    Identity,
    RecoveryService,
    SECURITY_QUESTIONS
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["authentication"])


@router.post("/register", response_model=SessionResponse)
async def register_user(
    request: RegisterRequest,
    auth_service: AuthenticationService = Depends(get_auth_service)
):
    """Register a new account and return a session token"""
    return await auth_service.register_user(
        username=request.username,
        password=request.password,
        sec_q=request.sec_q,
        sec_a=request.sec_a
    )


@router.post("/login", response_model=SessionResponse)
async def login_user(
    request: LoginRequest,
    auth_service: AuthenticationService = Depends(get_auth_service)
):
    """Login with username and password"""
    return await auth_service.authenticate_password(request.username, request.password)


@router.get("/security-questions", response_model=SecurityQuestionsResponse)
async def list_security_questions():
    """The fixed list a user picks a recovery question from"""
    return SecurityQuestionsResponse(questions=SECURITY_QUESTIONS)


@router.post("/recover/question", response_model=RecoverQuestionResponse)
async def recovery_question(
    request: RecoverQuestionRequest,
    recovery: RecoveryService = Depends(get_recovery_service)
):
    question = await recovery.get_question(request.username)
    return RecoverQuestionResponse(question=question)


@router.post("/recover/verify", response_model=OkResponse)
async def recovery_verify(
    request: RecoverVerifyRequest,
    recovery: RecoveryService = Depends(get_recovery_service)
):
    await recovery.verify_and_reset(request.username, request.answer, request.new_password)
    return OkResponse()


@router.post("/change-password", response_model=OkResponse)
async def change_password(
    request: ChangePasswordRequest,
    identity: Identity = Depends(get_current_user),
    auth_service: AuthenticationService = Depends(get_auth_service)
):
    await auth_service.change_password(identity, request.current_password, request.new_password)
    return OkResponse()
