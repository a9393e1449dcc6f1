"""
Records for TheBrain API payloads.

Fields keep the service's camelCase names because handlers echo them back to
MCP clients unchanged. Every field is optional and unknown keys are kept: the
service owns the schema and adds fields over time.
"""

from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class _Record(BaseModel):
    model_config = ConfigDict(extra="allow")


class BrainRecord(_Record):
    id: Optional[str] = None
    name: Optional[str] = None
    homeThoughtId: Optional[str] = None


class ThoughtRecord(_Record):
    id: Optional[str] = None
    brainId: Optional[str] = None
    name: Optional[str] = None
    label: Optional[str] = None
    kind: Optional[int] = None
    typeId: Optional[str] = None
    foregroundColor: Optional[str] = None
    backgroundColor: Optional[str] = None
    acType: Optional[int] = None
    creationDateTime: Optional[str] = None
    modificationDateTime: Optional[str] = None


class LinkRecord(_Record):
    id: Optional[str] = None
    brainId: Optional[str] = None
    thoughtIdA: Optional[str] = None
    thoughtIdB: Optional[str] = None
    name: Optional[str] = None
    color: Optional[str] = None
    thickness: Optional[Union[int, float]] = None
    relation: Optional[int] = None
    direction: Optional[int] = None
    meaning: Optional[int] = None
    kind: Optional[int] = None
    typeId: Optional[str] = None
    creationDateTime: Optional[str] = None
    modificationDateTime: Optional[str] = None


class AttachmentRecord(_Record):
    id: Optional[str] = None
    brainId: Optional[str] = None
    sourceId: Optional[str] = None
    sourceType: Optional[int] = None
    name: Optional[str] = None
    type: Optional[int] = None
    location: Optional[str] = None
    dataLength: Optional[int] = None
    position: Optional[Union[int, float]] = None
    isNotes: Optional[bool] = None
    creationDateTime: Optional[str] = None
    modificationDateTime: Optional[str] = None
    fileModificationDateTime: Optional[str] = None


class ThoughtGraphRecord(_Record):
    activeThought: Optional[ThoughtRecord] = None
    parents: Optional[List[ThoughtRecord]] = None
    children: Optional[List[ThoughtRecord]] = None
    jumps: Optional[List[ThoughtRecord]] = None
    siblings: Optional[List[ThoughtRecord]] = None
    tags: Optional[List[ThoughtRecord]] = None
    type: Optional[ThoughtRecord] = None
    links: Optional[List[LinkRecord]] = None
    attachments: Optional[List[AttachmentRecord]] = None


class SearchResultRecord(_Record):
    sourceThought: Optional[ThoughtRecord] = None
    name: Optional[str] = None
    searchResultType: Optional[int] = None
    snippet: Optional[str] = None
    attachmentId: Optional[str] = None


class NoteRecord(_Record):
    brainId: Optional[str] = None
    sourceId: Optional[str] = None
    markdown: Optional[str] = None
    html: Optional[str] = None
    text: Optional[str] = None
    modificationDateTime: Optional[str] = None


class BrainStatsRecord(_Record):
    brainName: Optional[str] = None
    brainId: Optional[str] = None
    dateGenerated: Optional[str] = None
    thoughts: Optional[int] = None
    forgottenThoughts: Optional[int] = None
    links: Optional[int] = None
    linksPerThought: Optional[float] = None
    thoughtTypes: Optional[int] = None
    linkTypes: Optional[int] = None
    tags: Optional[int] = None
    notes: Optional[int] = None
    internalFiles: Optional[int] = None
    internalFolders: Optional[int] = None
    externalFiles: Optional[int] = None
    externalFolders: Optional[int] = None
    webLinks: Optional[int] = None
    internalFilesSize: Optional[int] = None
    iconsFilesSize: Optional[int] = None
    assignedIcons: Optional[int] = None


class ModificationRecord(_Record):
    sourceId: Optional[str] = None
    sourceType: Optional[int] = None
    modType: Optional[int] = None
    oldValue: Optional[Any] = None
    newValue: Optional[Any] = None
    userId: Optional[str] = None
    creationDateTime: Optional[str] = None
    modificationDateTime: Optional[str] = None
    extraAId: Optional[str] = None
    extraBId: Optional[str] = None


class CreatedRecord(_Record):
    """Body returned by create endpoints."""

    id: str = Field(description="Id of the created entity")


JsonPayload = Union[dict, list, str, bytes]
