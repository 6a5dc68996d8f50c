#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""SPEARBOOT enumerations with tagged members.

Every member carries a numeric tag (the value found on the wire or in a binary
header), a label used on the command line and in logs, and an optional
human readable description.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from typing_extensions import Self

from spearboot.exceptions import SPEARKeyError


@dataclass(frozen=True)
class SpearEnumMember:
    """Value of a tagged enumeration member."""

    tag: int
    label: str
    description: Optional[str] = None


class SpearEnum(SpearEnumMember, Enum):
    """Enumeration looked up by tag or by label.

    A member is equal to its own tag and to its own label, so protocol code may
    compare it directly with decoded integers.
    """

    def __eq__(self, other: object) -> bool:
        return other in (self.tag, self.label)

    def __hash__(self) -> int:
        return hash((self.tag, self.label))

    @classmethod
    def from_tag(cls, tag: int) -> Self:
        """Find member by its tag.

        :param tag: Numeric tag.
        :raises SPEARKeyError: No member has the tag.
        :return: Enum member.
        """
        for member in cls:
            if member.tag == tag:
                return member
        raise SPEARKeyError(f"{cls.__name__} has no member with tag {tag}")

    @classmethod
    def from_label(cls, label: str) -> Self:
        """Find member by its label, case is ignored.

        :param label: Member label.
        :raises SPEARKeyError: No member has the label.
        :return: Enum member.
        """
        if not isinstance(label, str):
            raise SPEARKeyError(f"{cls.__name__} label must be a string, got {label!r}")
        for member in cls:
            if member.label.lower() == label.lower():
                return member
        raise SPEARKeyError(f"{cls.__name__} has no member labeled '{label}'")

    @classmethod
    def from_attr(cls, attribute: Union[int, str]) -> Self:
        """Find member by tag (int) or label (str).

        :param attribute: Tag or label.
        :raises SPEARKeyError: No member matches.
        :return: Enum member.
        """
        if isinstance(attribute, int):
            return cls.from_tag(attribute)
        return cls.from_label(attribute)

    @classmethod
    def get_description(cls, tag: int, default: Optional[str] = None) -> Optional[str]:
        """Get description of the member with given tag.

        :param tag: Numeric tag.
        :param default: Returned when the member has no description.
        :raises SPEARKeyError: No member has the tag.
        :return: Description text.
        """
        return cls.from_tag(tag).description or default


class SpearSoftEnum(SpearEnum):
    """Tagged enumeration describing unknown tags instead of failing.

    Used for informational header fields, where any value may appear.
    """

    @classmethod
    def get_description(cls, tag: int, default: Optional[str] = None) -> Optional[str]:
        try:
            return super().get_description(tag, default)
        except SPEARKeyError:
            return f"Unknown ({tag})"
