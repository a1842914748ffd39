import pytest

from talentlink.core.errors import InvalidRoleError, NotFoundError
from talentlink.services.mentor_eligibility import (
    build_visibility_message, check_mentor_eligibility,
    get_mentor_profile_requirements, is_valid_linkedin_url
)
from talentlink.services.user_service import UserService


@pytest.mark.parametrize("value, expected", [
    ("https://linkedin.com/in/x", True),
    ("linkedin.com/in/x", False),
    ("https://example.com", False),
    ("", False),
    ("  https://www.LinkedIn.com/in/y  ", True),
    ("HTTP://LINKEDIN.COM/in/z", True),
    ("https://", False),
    ("ftp://linkedin.com/in/x", False),
    (None, False),
    ("   ", False),
])
def test_is_valid_linkedin_url(value, expected):
    assert is_valid_linkedin_url(value) is expected


def test_completion_percentage_comes_from_cached_value():
    eligibility = check_mentor_eligibility({"role": "mentor", "profile_completion_percentage": 42})
    assert eligibility.completion_percentage == 42
    assert check_mentor_eligibility({"role": "mentor"}).completion_percentage == 0


def test_success_message_has_no_actions():
    message = build_visibility_message(check_mentor_eligibility({"linkedin_url": "https://linkedin.com/in/a"}))
    assert message.type == "success"
    assert message.actions == []


@pytest.mark.parametrize("completion, urgent", [(0, True), (59, True), (60, False), (100, False)])
def test_warning_marks_actions_urgent_below_sixty_percent(completion, urgent):
    eligibility = check_mentor_eligibility({"linkedin_url": "", "profile_completion_percentage": completion})
    message = build_visibility_message(eligibility)
    assert message.type == "warning"
    assert message.completion_percentage == completion
    assert [(action.key, action.urgent) for action in message.actions] == [("linkedin_url", urgent)]


def test_requirements_for_missing_mentor():
    with pytest.raises(NotFoundError):
        get_mentor_profile_requirements("nope")


def test_requirements_for_non_mentor():
    user = UserService().register("u@talentlink.io", "secret123", "U", "Ser", "user")
    with pytest.raises(InvalidRoleError):
        get_mentor_profile_requirements(user["id"])


def test_requirements_for_mentor():
    users = UserService()
    mentor = users.register("m@talentlink.io", "secret123", "Grace", "Hopper", "mentor")
    users.update_profile(mentor["id"], {"linkedin_url": "https://linkedin.com/in/grace", "bio": "Navy"})

    result = get_mentor_profile_requirements(mentor["id"])
    assert result.is_eligible
    assert result.mentor.name == "Grace Hopper"
    assert result.mentor.email == "m@talentlink.io"
    assert "bio" in result.profile_status.completed_fields
    assert result.completion_percentage == result.profile_status.completion_percentage
