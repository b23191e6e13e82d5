# studypod/core/exceptions.py
"""Custom exceptions for the StudyPod application."""
from fastapi import HTTPException
from typing import Any, Dict, Optional


class StudyPodException(HTTPException):
    """Base exception for StudyPod application."""
    def __init__(
        self,
        status_code: int,
        detail: Any,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)


class NotAuthenticated(StudyPodException):
    def __init__(self, message: str = "Authentication required"):
        super().__init__(status_code=401, detail=message)


class UserNotFound(StudyPodException):
    def __init__(self):
        super().__init__(status_code=404, detail="User not found")


class PodNotFound(StudyPodException):
    def __init__(self):
        super().__init__(status_code=404, detail="Study pod not found")


class SessionNotFound(StudyPodException):
    def __init__(self):
        super().__init__(status_code=404, detail="Study session not found")


class DuplicateUserError(StudyPodException):
    def __init__(self, email: str):
        super().__init__(
            status_code=409,
            detail={
                "error": "Duplicate email",
                "message": "A user with this email already exists",
                "field": "email",
                "value": email
            }
        )


class AlreadyMemberError(StudyPodException):
    def __init__(self):
        super().__init__(status_code=409, detail="Already a member of this study pod")


class PodFullError(StudyPodException):
    """Raised when a pod has reached its member limit."""
    def __init__(self, max_members: int):
        super().__init__(
            status_code=409,
            detail={
                "error": "Pod full",
                "message": f"This study pod already has {max_members} members",
            }
        )


class MessageRejected(StudyPodException):
    """Raised when moderation flags a chat message."""
    def __init__(self, reason: Optional[str] = None, suggested_edit: Optional[str] = None):
        self.reason = reason
        self.suggested_edit = suggested_edit
        super().__init__(
            status_code=400,
            detail={
                "message": "Message content is not appropriate",
                "reason": reason,
                "suggestedEdit": suggested_edit,
            }
        )


class MessagePersistenceError(StudyPodException):
    """Raised when a chat message could not be stored; nothing is broadcast."""
    def __init__(self, message: str = "Failed to create message"):
        super().__init__(status_code=500, detail=message)


class ValidationError(StudyPodException):
    """Exception raised for validation errors."""
    def __init__(self, message: str, field: Optional[str] = None):
        detail = {"error": "Validation Error", "message": message}
        if field:
            detail["field"] = field
        super().__init__(status_code=422, detail=detail)


class VideoCallNotFound(StudyPodException):
    def __init__(self):
        super().__init__(status_code=404, detail="Video call not found")


class NotInVideoCall(StudyPodException):
    def __init__(self):
        super().__init__(status_code=404, detail="Not currently in this video call")


class AlreadyInCallError(StudyPodException):
    def __init__(self):
        super().__init__(status_code=409, detail="Already in this video call")


class VideoCallFullError(StudyPodException):
    """Raised when a call has reached its participant limit."""
    def __init__(self, max_participants: int):
        super().__init__(
            status_code=409,
            detail={
                "error": "Call full",
                "message": f"This video call already has {max_participants} participants",
            }
        )


class NotCallHost(StudyPodException):
    def __init__(self):
        super().__init__(status_code=403, detail="Only the host can start or end this video call")
