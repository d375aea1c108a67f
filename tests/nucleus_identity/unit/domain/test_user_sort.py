"""Unit tests for sort key parsing."""

import pytest

from nucleus_identity.domain.user import (
    InvalidSortKeyError,
    SortDirection,
    UserSort,
    UserSortField,
)


class TestUserSortParse:
    @pytest.mark.parametrize("sort_by", [None, "", "   "])
    def test_missing_key_defaults_to_username_ascending(self, sort_by):
        assert UserSort.parse(sort_by) == UserSort(
            UserSortField.USERNAME,
            SortDirection.ASC,
        )

    @pytest.mark.parametrize(
        ("sort_by", "field", "descending"),
        [
            ("username", UserSortField.USERNAME, False),
            ("UserName", UserSortField.USERNAME, False),
            ("user_name desc", UserSortField.USERNAME, True),
            ("email", UserSortField.EMAIL, False),
            ("Email DESC", UserSortField.EMAIL, True),
            ("email asc", UserSortField.EMAIL, False),
            ("-id", UserSortField.ID, True),
            ("id", UserSortField.ID, False),
        ],
    )
    def test_accepts_allow_listed_fields(self, sort_by, field, descending):
        sort = UserSort.parse(sort_by)

        assert sort.field == field
        assert sort.descending is descending

    @pytest.mark.parametrize(
        "sort_by",
        [
            "password_hash",
            "security_stamp",
            "username; DROP TABLE users",
            "email sideways",
            "email asc extra",
            "-",
        ],
    )
    def test_rejects_everything_else(self, sort_by):
        with pytest.raises(InvalidSortKeyError) as exc_info:
            UserSort.parse(sort_by)

        assert exc_info.value.sort_key == sort_by

    def test_invalid_sort_key_is_value_error(self):
        with pytest.raises(ValueError):
            UserSort.parse("created_at")
