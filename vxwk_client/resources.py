"""
Resource endpoints of the Vxwk open API.

Each method is a fixed path plus pass-through parameters on top of
:class:`vxwk_client.client.VxwkClient`. Query-style calls sign ``opt``
together with the resource id; write calls send them as the JSON body.
"""

import base64
from typing import Any, Dict, Mapping, Optional

from .client import VxwkClient

# Douyin cards
DY_CARD = "/api/v1/user/carddy"
DY_CARD_IMG = "/api/v1/user/carddy/img"
DY_CARD_LIST = "/api/v1/user/carddy/list"
DY_CARD_UPDATE = "/api/v1/user/carddy/update"
DY_CARD_DELETE = "/api/v1/user/carddy/delete"

# WeChat cards
WX_CARD = "/api/v1/user/wxcard"
WX_CARD_INFO = "/api/v1/user/cardwx"
WX_CARD_IMG = "/api/v1/user/wxcard/img"
WX_CARD_UPDATE = "/api/v1/user/wxcard/update"
WX_CARD_DELETE = "/api/v1/user/wxcard/delete"

# Live codes
LIVE_CODE_LIST = "/api/v1/user/livecode/list"
LIVE_CODE_CREATE = "/api/v1/user/livecode/create"
LIVE_CODE_UPDATE = "/api/v1/user/livecode/update"
LIVE_CODE_DELETE = "/api/v1/user/livecode/delete"
LIVE_CODE_INFO = "/api/v1/user/livecode/info"
LIVE_CODE_FILE = "/api/v1/user/livecode/file"
LIVE_CODE_FILE_LIST = "/api/v1/user/livecode/file/list"
LIVE_CODE_FILE_UPLOAD = "/api/v1/user/livecode/file/update"
LIVE_CODE_FILE_RENAME = "/api/v1/user/livecode/file/name/update"
LIVE_CODE_FILE_DELETE = "/api/v1/user/livecode/file/delete"

# External links
EXTERNAL_IMG = "/api/v1/admin/external/img"
EXTERNAL = "/api/v1/user/external"
EXTERNAL_LIST = "/api/v1/user/external/list"
EXTERNAL_CREATE = "/api/v1/user/external/create"
EXTERNAL_UPDATE = "/api/v1/user/external/update"
EXTERNAL_DELETE = "/api/v1/user/external/delete"

# Short links
SHORT_LINK = "/api/v1/user/shortlink"
SHORT_LINK_LIST = "/api/v1/user/shortlink/list"
SHORT_LINK_CREATE = "/api/v1/user/shortlink/create"
SHORT_LINK_UPDATE = "/api/v1/user/shortlink/update"
SHORT_LINK_DELETE = "/api/v1/user/shortlink/delete"


def _with(key: str, value: str, opt: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    params = {key: value}
    if opt:
        params.update(opt)
    return params


class ResourceMixin:
    """Card, live-code, external-link and short-link endpoints."""

    # Douyin cards

    def dy_card_img_url(self, project_id: str, opt: Optional[Mapping[str, Any]] = None) -> str:
        return self.get_location(DY_CARD_IMG, _with("projectid", project_id, opt))

    def dy_card_list(self, opt: Optional[Mapping[str, Any]] = None) -> Any:
        return self.get(DY_CARD_LIST, opt)

    def dy_card_info(self, card_id: str, opt: Optional[Mapping[str, Any]] = None) -> Any:
        return self.get(DY_CARD, _with("id", card_id, opt))

    def dy_card_create(self, opt: Mapping[str, Any]) -> Any:
        return self.post(DY_CARD, dict(opt))

    def dy_card_update(self, card_id: str, opt: Optional[Mapping[str, Any]] = None) -> Any:
        return self.post(DY_CARD_UPDATE, _with("id", card_id, opt))

    def dy_card_delete(self, card_id: str, opt: Optional[Mapping[str, Any]] = None) -> Any:
        return self.post(DY_CARD_DELETE, _with("id", card_id, opt))

    # WeChat cards

    def wx_card_img_url(self, project_id: str, opt: Optional[Mapping[str, Any]] = None) -> str:
        return self.get_location(WX_CARD_IMG, _with("projectid", project_id, opt))

    def wx_card_list(self, opt: Optional[Mapping[str, Any]] = None) -> Any:
        return self.get(WX_CARD, opt)

    def wx_card_info(self, card_id: str, opt: Optional[Mapping[str, Any]] = None) -> Any:
        return self.get(WX_CARD_INFO, _with("id", card_id, opt))

    def wx_card_create(self, opt: Mapping[str, Any]) -> Any:
        return self.post(WX_CARD, dict(opt))

    def wx_card_update(self, card_id: str, opt: Optional[Mapping[str, Any]] = None) -> Any:
        return self.post(WX_CARD_UPDATE, _with("id", card_id, opt))

    def wx_card_delete(self, card_id: str, opt: Optional[Mapping[str, Any]] = None) -> Any:
        return self.post(WX_CARD_DELETE, _with("id", card_id, opt))

    # Live codes

    def live_code_list(self, opt: Optional[Mapping[str, Any]] = None) -> Any:
        return self.get(LIVE_CODE_LIST, opt)

    def live_code_create(self, opt: Mapping[str, Any]) -> Any:
        return self.post(LIVE_CODE_CREATE, dict(opt))

    def live_code_update(self, code_id: str, opt: Optional[Mapping[str, Any]] = None) -> Any:
        return self.post(LIVE_CODE_UPDATE, _with("id", code_id, opt))

    def live_code_delete(self, code_id: str, opt: Optional[Mapping[str, Any]] = None) -> Any:
        return self.post(LIVE_CODE_DELETE, _with("id", code_id, opt))

    def live_code_info(self, code_id: str, opt: Optional[Mapping[str, Any]] = None) -> Any:
        return self.post(LIVE_CODE_INFO, _with("id", code_id, opt))

    def live_code_file_list(self, opt: Optional[Mapping[str, Any]] = None) -> Any:
        return self.get(LIVE_CODE_FILE_LIST, opt)

    def live_code_file_url(self, file_id: str, opt: Optional[Mapping[str, Any]] = None) -> Any:
        return self.get(LIVE_CODE_FILE, _with("id", file_id, opt))

    def live_code_file_upload(self, data: bytes, name: str) -> Any:
        """Upload a live-code file; the content travels base64-encoded in the JSON body."""
        encoded = base64.b64encode(data).decode('ascii')
        return self.post(LIVE_CODE_FILE_UPLOAD, {"file": f"base64:{encoded}", "name": name})

    def live_code_file_rename(self, file_id: str, name: str) -> Any:
        return self.post(LIVE_CODE_FILE_RENAME, {"fid": file_id, "name": name})

    def live_code_file_delete(self, file_id: str, opt: Optional[Mapping[str, Any]] = None) -> Any:
        return self.post(LIVE_CODE_FILE_DELETE, _with("id", file_id, opt))

    # External links

    def external_logo_url(self, project_id: str, opt: Optional[Mapping[str, Any]] = None) -> str:
        return self.get_location(EXTERNAL_IMG, _with("projectid", project_id, opt))

    def external_url_list(self, opt: Optional[Mapping[str, Any]] = None) -> Any:
        return self.get(EXTERNAL_LIST, opt)

    def external_url_info(self, link_id: str, opt: Optional[Mapping[str, Any]] = None) -> Any:
        return self.get(EXTERNAL, _with("id", link_id, opt))

    def external_url_create(self, opt: Mapping[str, Any]) -> Any:
        """
        Create an external link.

        ``opt`` is passed through as the JSON body, e.g. ``domainID``,
        ``title``, ``describe``, ``type``, ``link``, ``testMode``, ``style``.
        """
        return self.post(EXTERNAL_CREATE, dict(opt))

    def external_url_update(self, opt: Mapping[str, Any]) -> Any:
        return self.post(EXTERNAL_UPDATE, dict(opt))

    def external_url_delete(self, link_id: str, opt: Optional[Mapping[str, Any]] = None) -> Any:
        return self.post(EXTERNAL_DELETE, _with("id", link_id, opt))

    # Short links

    def short_link_list(self, opt: Optional[Mapping[str, Any]] = None) -> Any:
        return self.get(SHORT_LINK_LIST, opt)

    def short_link_detail(self, link_id: str, opt: Optional[Mapping[str, Any]] = None) -> Any:
        return self.get(SHORT_LINK, _with("id", link_id, opt))

    def short_link_create(self, opt: Mapping[str, Any]) -> Any:
        return self.post(SHORT_LINK_CREATE, dict(opt))

    def short_link_update(self, link_id: str, opt: Optional[Mapping[str, Any]] = None) -> Any:
        return self.post(SHORT_LINK_UPDATE, _with("id", link_id, opt))

    def short_link_delete(self, link_id: str) -> Any:
        return self.post(SHORT_LINK_DELETE, {"id": link_id})


class VxwkAPI(ResourceMixin, VxwkClient):
    """
    Full Vxwk API client.

    Example:
        with VxwkAPI("https://api.example.com", "access-key", "access-secret") as api:
            links = api.short_link_list()
    """
