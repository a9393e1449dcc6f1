"""
Response reshaping helpers.

Turn raw TheBrain payloads into the summaries returned by tools, adding
human-readable labels next to numeric codes.
"""

from typing import Any, Dict, List, Optional

from thebrain_mcp.codes import (
    DirectionFlag,
    get_ac_type_name,
    get_attachment_type_name,
    get_kind_name,
    get_link_kind_name,
    get_meaning_name,
    get_relation_name,
    get_source_type_name,
)
from thebrain_mcp.models import AttachmentRecord, LinkRecord, ThoughtRecord

BYTE_UNITS = ["Bytes", "KB", "MB", "GB", "TB"]


def format_bytes(num_bytes: Optional[float]) -> str:
    """
    Human-readable binary size.

    >>> format_bytes(0)
    '0 Bytes'
    >>> format_bytes(1536)
    '1.5 KB'
    >>> format_bytes(1073741824)
    '1 GB'
    """
    if not num_bytes or num_bytes <= 0:
        return "0 Bytes"
    # floor(log1024(n)) with integer comparisons so exact powers are not off by one
    exponent = 0
    while exponent < len(BYTE_UNITS) - 1 and num_bytes >= 1024 ** (exponent + 1):
        exponent += 1
    value = round(num_bytes / (1024 ** exponent), 2)
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {BYTE_UNITS[exponent]}"


def decode_direction(direction: Optional[int]) -> Optional[Dict[str, Any]]:
    """
    Decode a link's direction bit flags.

    bit0 = directed, bit1 = B→A, bit2 = one-way. Returns None when the link
    carries no direction value.
    """
    if direction is None:
        return None
    flags = DirectionFlag(int(direction) & 0b111)
    info: Dict[str, Any] = {
        "value": direction,
        "isDirected": DirectionFlag.IS_DIRECTED in flags,
        "isBackward": DirectionFlag.DIRECTION_BA in flags,
        "isOneWay": DirectionFlag.ONE_WAY in flags,
    }
    parts = []
    if info["isDirected"]:
        parts.append("B→A" if info["isBackward"] else "A→B")
    else:
        parts.append("Undirected")
    if info["isOneWay"]:
        parts.append("One-Way")
    info["description"] = ", ".join(parts)
    return info


def _record(model, raw: Any):
    if raw is None:
        return None
    if isinstance(raw, model):
        return raw
    return model.model_validate(raw)


def format_thought(raw: Any) -> Optional[Dict[str, Any]]:
    """Thought summary used in lists and graphs."""
    thought = _record(ThoughtRecord, raw)
    if thought is None:
        return None
    return {
        "id": thought.id,
        "name": thought.name,
        "label": thought.label,
        "kind": thought.kind,
        "kindName": get_kind_name(thought.kind),
        "foregroundColor": thought.foregroundColor,
        "backgroundColor": thought.backgroundColor,
    }


def format_thought_details(raw: Any) -> Dict[str, Any]:
    """Full thought view returned by get_thought."""
    thought = _record(ThoughtRecord, raw) or ThoughtRecord()
    return {
        "id": thought.id,
        "brainId": thought.brainId,
        "name": thought.name,
        "label": thought.label,
        "kind": thought.kind,
        "kindName": get_kind_name(thought.kind),
        "typeId": thought.typeId,
        "foregroundColor": thought.foregroundColor,
        "backgroundColor": thought.backgroundColor,
        "acType": thought.acType,
        "acTypeName": get_ac_type_name(thought.acType),
        "creationDateTime": thought.creationDateTime,
        "modificationDateTime": thought.modificationDateTime,
    }


def format_link(raw: Any) -> Optional[Dict[str, Any]]:
    """Link summary used in graphs."""
    link = _record(LinkRecord, raw)
    if link is None:
        return None
    return {
        "id": link.id,
        "thoughtIdA": link.thoughtIdA,
        "thoughtIdB": link.thoughtIdB,
        "name": link.name,
        "color": link.color,
        "thickness": link.thickness,
        "relation": link.relation,
        "direction": link.direction,
    }


def format_link_details(raw: Any) -> Dict[str, Any]:
    """Full link view returned by get_link."""
    link = _record(LinkRecord, raw) or LinkRecord()
    return {
        "id": link.id,
        "brainId": link.brainId,
        "thoughtIdA": link.thoughtIdA,
        "thoughtIdB": link.thoughtIdB,
        "name": link.name,
        "color": link.color,
        "thickness": link.thickness,
        "relation": link.relation,
        "relationName": get_relation_name(link.relation),
        "direction": link.direction,
        "directionInfo": decode_direction(link.direction),
        "meaning": link.meaning,
        "meaningName": get_meaning_name(link.meaning),
        "kind": link.kind,
        "kindName": get_link_kind_name(link.kind),
        "typeId": link.typeId,
        "creationDateTime": link.creationDateTime,
        "modificationDateTime": link.modificationDateTime,
    }


def format_attachment(raw: Any) -> Optional[Dict[str, Any]]:
    """Attachment summary used in graphs."""
    attachment = _record(AttachmentRecord, raw)
    if attachment is None:
        return None
    return {
        "id": attachment.id,
        "name": attachment.name,
        "type": attachment.type,
        "location": attachment.location,
        "dataLength": attachment.dataLength,
    }


def format_attachment_listing(raw: Any) -> Dict[str, Any]:
    """Attachment entry returned by list_attachments."""
    attachment = _record(AttachmentRecord, raw) or AttachmentRecord()
    return {
        "id": attachment.id,
        "name": attachment.name,
        "type": attachment.type,
        "typeName": get_attachment_type_name(attachment.type),
        "location": attachment.location,
        "dataLength": attachment.dataLength,
        "isNotes": attachment.isNotes,
        "position": attachment.position,
    }


def format_attachment_details(raw: Any) -> Dict[str, Any]:
    """Full attachment metadata returned by get_attachment."""
    attachment = _record(AttachmentRecord, raw) or AttachmentRecord()
    return {
        "id": attachment.id,
        "brainId": attachment.brainId,
        "sourceId": attachment.sourceId,
        "sourceType": attachment.sourceType,
        "sourceTypeName": get_source_type_name(attachment.sourceType),
        "name": attachment.name,
        "type": attachment.type,
        "typeName": get_attachment_type_name(attachment.type),
        "location": attachment.location,
        "dataLength": attachment.dataLength,
        "position": attachment.position,
        "isNotes": attachment.isNotes,
        "creationDateTime": attachment.creationDateTime,
        "modificationDateTime": attachment.modificationDateTime,
        "fileModificationDateTime": attachment.fileModificationDateTime,
    }


def format_many(formatter, items: Optional[List[Any]]) -> List[Dict[str, Any]]:
    """Apply a formatter to a possibly missing list."""
    return [formatter(item) for item in (items or [])]
