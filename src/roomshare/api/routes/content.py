"""Post and announcement routes.

Every endpoint here requires a Bearer credential and membership of the room
named in the request.
"""

from typing import List, Optional

from fastapi import APIRouter, File, Form, HTTPException, UploadFile, status

from roomshare.core.dependencies import ContentLedgerDep, PrincipalDep
from roomshare.core.exceptions import AttachmentWriteFailed, ForbiddenError, StoreUnavailable
from roomshare.schemas.content import AnnounceRequest, AnnouncementInfo, PostInfo, RoomCodeRequest
from roomshare.utils.attachment_store import Attachment
from roomshare.utils.content_ledger import as_utc

router = APIRouter(tags=["Content"])


def _build_post_info(model) -> PostInfo:
    return PostInfo(
        id=str(model.id),
        content=model.content,
        file_url=model.file_url,
        author=model.author,
        timestamp=as_utc(model.timestamp).isoformat(),
    )


def _build_announcement_info(model) -> AnnouncementInfo:
    return AnnouncementInfo(
        id=str(model.id),
        title=model.title,
        description=model.description,
        author=model.author,
        timestamp=as_utc(model.timestamp).isoformat(),
    )


def _forbidden() -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")


@router.post("/upload", status_code=status.HTTP_201_CREATED, summary="Write post")
def upload(
    principal: PrincipalDep,
    ledger: ContentLedgerDep,
    code: str = Form(min_length=1),
    content: str = Form(min_length=1),
    file: Optional[UploadFile] = File(default=None),
) -> dict:
    """Write a post, optionally with an attached file.

    The post is only recorded once its file has been stored.

    Raises:
        HTTPException: 403 if the caller is not a member of the room, 500 if
            the file or the post could not be stored.
    """
    attachment = None
    if file is not None and file.filename:
        attachment = Attachment(
            data=file.file.read(),
            filename=file.filename,
            content_type=file.content_type,
        )
    try:
        ledger.write_post(principal, code, content, attachment)
    except ForbiddenError:
        raise _forbidden()
    except (AttachmentWriteFailed, StoreUnavailable):
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error uploading post",
        )
    return {"success": True, "message": "Post uploaded"}


@router.post("/posts", response_model=List[PostInfo], summary="List posts")
def list_posts(
    req: RoomCodeRequest, principal: PrincipalDep, ledger: ContentLedgerDep
) -> List[PostInfo]:
    try:
        posts = ledger.list_posts(principal, req.code)
    except ForbiddenError:
        raise _forbidden()
    except StoreUnavailable:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error fetching posts",
        )
    return [_build_post_info(post) for post in posts]


@router.post("/announce", status_code=status.HTTP_201_CREATED, summary="Write announcement")
def announce(req: AnnounceRequest, principal: PrincipalDep, ledger: ContentLedgerDep) -> dict:
    try:
        ledger.write_announcement(principal, req.code, req.title, req.description)
    except ForbiddenError:
        raise _forbidden()
    except StoreUnavailable:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error creating announcement",
        )
    return {"success": True, "message": "Announcement created"}


@router.post(
    "/getAnnouncements", response_model=List[AnnouncementInfo], summary="List announcements"
)
def get_announcements(
    req: RoomCodeRequest, principal: PrincipalDep, ledger: ContentLedgerDep
) -> List[AnnouncementInfo]:
    """List announcements of a room, gated by membership like posts."""
    try:
        announcements = ledger.list_announcements(principal, req.code)
    except ForbiddenError:
        raise _forbidden()
    except StoreUnavailable:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error fetching announcements",
        )
    return [_build_announcement_info(a) for a in announcements]
