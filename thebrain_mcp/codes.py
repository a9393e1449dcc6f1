"""
Numeric code tables used by TheBrain's API.

Each table is a closed IntEnum. Lookups are total: an unknown or missing code
maps to a fallback label instead of raising, because the service can add
codes at any time.
"""

from enum import IntEnum, IntFlag
from typing import Any, Dict, Optional


class _LabeledEnum(IntEnum):
    """IntEnum with a display label and a total code -> label lookup."""

    @classmethod
    def label(cls, code: Any) -> str:
        member = cls.from_code(code)
        if member is None:
            return cls.fallback_label(code)
        return cls._labels().get(member.value, member.name)

    @classmethod
    def from_code(cls, code: Any) -> Optional["_LabeledEnum"]:
        if isinstance(code, bool) or code is None:
            return None
        try:
            return cls(int(code))
        except (TypeError, ValueError):
            return None

    @classmethod
    def fallback_label(cls, code: Any) -> str:
        return "Unknown"

    @classmethod
    def _labels(cls) -> Dict[int, str]:
        return {}


class ThoughtKind(_LabeledEnum):
    NORMAL = 1
    TYPE = 2
    EVENT = 3
    TAG = 4
    SYSTEM = 5

    @classmethod
    def _labels(cls):
        return {1: "Normal", 2: "Type", 3: "Event", 4: "Tag", 5: "System"}


class AccessType(_LabeledEnum):
    PUBLIC = 0
    PRIVATE = 1

    @classmethod
    def label(cls, code: Any) -> str:
        # The service only distinguishes public (0) from everything else.
        return "Public" if code == cls.PUBLIC else "Private"


class RelationType(_LabeledEnum):
    CHILD = 1
    PARENT = 2
    JUMP = 3
    SIBLING = 4

    @classmethod
    def _labels(cls):
        return {1: "Child", 2: "Parent", 3: "Jump", 4: "Sibling"}


class LinkMeaning(_LabeledEnum):
    NORMAL = 1
    INSTANCE_OF = 2
    TYPE_OF = 3
    HAS_EVENT = 4
    HAS_TAG = 5
    SYSTEM = 6
    SUB_TAG_OF = 7

    @classmethod
    def _labels(cls):
        return {
            1: "Normal",
            2: "InstanceOf",
            3: "TypeOf",
            4: "HasEvent",
            5: "HasTag",
            6: "System",
            7: "SubTagOf",
        }


class LinkKind(_LabeledEnum):
    NORMAL = 1
    TYPE = 2

    @classmethod
    def label(cls, code: Any) -> str:
        return "Normal" if code == cls.NORMAL else "Type"


class EntityType(_LabeledEnum):
    BRAIN = 1
    THOUGHT = 2
    LINK = 3
    ATTACHMENT = 4
    BRAIN_SETTING = 5
    BRAIN_ACCESS = 6
    CALENDAR_EVENT = 7
    FIELD_INSTANCE = 8
    FIELD_DEFINITION = 9

    @classmethod
    def _labels(cls):
        return {
            1: "Brain",
            2: "Thought",
            3: "Link",
            4: "Attachment",
            5: "BrainSetting",
            6: "BrainAccess",
            7: "CalendarEvent",
            8: "FieldInstance",
            9: "FieldDefinition",
        }


class AttachmentType(_LabeledEnum):
    FILE = 0
    URL = 1
    INTERNAL_FILE = 2
    EXTERNAL_FILE = 3
    WEB_LINK = 4

    @classmethod
    def _labels(cls):
        return {0: "File", 1: "URL", 2: "InternalFile", 3: "ExternalFile", 4: "WebLink"}

    @classmethod
    def fallback_label(cls, code: Any) -> str:
        return f"Type{code}"


class SearchResultType(_LabeledEnum):
    UNKNOWN = 0
    THOUGHT = 1
    LINK = 2
    ATTACHMENT = 3
    NOTE = 4
    LABEL = 5
    TYPE = 6
    TAG = 7

    @classmethod
    def _labels(cls):
        return {
            0: "Unknown",
            1: "Thought",
            2: "Link",
            3: "Attachment",
            4: "Note",
            5: "Label",
            6: "Type",
            7: "Tag",
        }


class ModificationType(_LabeledEnum):
    # Generic
    CREATED = 101
    DELETED = 102
    CHANGED_NAME = 103
    CREATED_BY_PASTE = 104
    MODIFIED_BY_PASTE = 105
    # Thoughts and links
    CHANGED_COLOR = 201
    CHANGED_LABEL = 202
    SET_TYPE = 203
    CHANGED_COLOR2 = 204
    CREATED_ICON = 205
    DELETED_ICON = 206
    CHANGED_ICON = 207
    # Thoughts
    FORGOT = 301
    REMEMBERED = 302
    CHANGED_ACCESS_TYPE = 303
    CHANGED_KIND = 304
    # Links
    CHANGED_THICKNESS = 401
    MOVED_LINK = 402
    CHANGED_DIRECTION = 403
    CHANGED_MEANING = 404
    CHANGED_RELATION = 405
    # Attachments
    CHANGED_CONTENT = 501
    CHANGED_LOCATION = 502
    CHANGED_POSITION = 503
    # Notes
    CREATED_NOTE = 801
    DELETED_NOTE = 802
    CHANGED_NOTE = 803

    @classmethod
    def _labels(cls):
        # CHANGED_ACCESS_TYPE -> "Changed Access Type"
        return {member.value: member.name.replace("_", " ").title() for member in cls}

    @classmethod
    def fallback_label(cls, code: Any) -> str:
        return f"ModType{code}"


class DirectionFlag(IntFlag):
    """Bit flags of a link's direction field."""

    IS_DIRECTED = 1
    DIRECTION_BA = 2
    ONE_WAY = 4


def get_kind_name(kind: Any) -> str:
    return ThoughtKind.label(kind)


def get_ac_type_name(ac_type: Any) -> str:
    return AccessType.label(ac_type)


def get_relation_name(relation: Any) -> str:
    return RelationType.label(relation)


def get_meaning_name(meaning: Any) -> str:
    return LinkMeaning.label(meaning)


def get_link_kind_name(kind: Any) -> str:
    return LinkKind.label(kind)


def get_entity_type_name(entity_type: Any) -> str:
    return EntityType.label(entity_type)


# Attachment sources and modification sources share the entity table.
get_source_type_name = get_entity_type_name


def get_attachment_type_name(attachment_type: Any) -> str:
    return AttachmentType.label(attachment_type)


def get_search_result_type_name(result_type: Any) -> str:
    return SearchResultType.label(result_type)


def get_modification_type_name(mod_type: Any) -> str:
    return ModificationType.label(mod_type)
