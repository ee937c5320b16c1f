"""
Figma REST API 讀取

figmakeys 只需要兩個唯讀端點：
  GET /v1/files/:key   → 整份文件樹（document + styles），交給 parse_document
  GET /v1/images/:key  → { nodeId: 下載 URL }，images 指令的 --with-urls 使用
"""

from typing import Optional

import requests

DEFAULT_TIMEOUT = 60


class FigmaAPIClient:
    """Figma REST API 唯讀封裝；HTTP 錯誤以 requests.HTTPError 往上拋，由 CLI 轉成訊息."""

    BASE_URL = "https://api.figma.com/v1"

    def __init__(self, token: str, timeout: float = DEFAULT_TIMEOUT):
        self.token = token
        # 大型設計檔下載很慢，逾時要比一般 API 長
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"X-Figma-Token": token})

    def _get(self, path: str, params: dict) -> dict:
        resp = self.session.get(f"{self.BASE_URL}/{path}", params=params, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()

    def get_file(self, file_key: str, node_ids: Optional[list] = None) -> dict:
        """下載文件；node_ids 只限制回傳的子樹，styles 仍是整份檔案的."""
        params = {}
        if node_ids:
            params["ids"] = ",".join(node_ids)
        return self._get(f"files/{file_key}", params)

    def get_images(self, file_key: str, node_ids: list, format: str = "png", scale: float = 1) -> dict:
        """回傳 { nodeId: 下載 URL }；無法 render 的節點 URL 為 None."""
        params = {"ids": ",".join(node_ids), "format": format, "scale": scale}
        return self._get(f"images/{file_key}", params).get("images") or {}
