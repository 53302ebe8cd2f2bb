"""prorcp page decoder.

Flow for one redirect record:
  1. {base}/prorcp/{token}     -> page HTML with versioned player scripts
  2. {base}/{script}?_={ver}   -> player JS with ``window[<key>("<seed>")``
  3. decrypt(seed, key)        -> id of the element holding the payload
  4. decrypt(element text, key) -> stream URL

Every step degrades to None; a broken record never affects its siblings.
"""

from __future__ import annotations

import httpx
import structlog

from embedscout.domain.entities import KeyMaterial, RedirectRecord, ResolutionContext
from embedscout.domain.ports import DecryptorPort, HtmlDocumentPort
from embedscout.infrastructure.common.html_selectors import SoupDocument, id_selector
from embedscout.infrastructure.common.patterns import VERSIONED_SCRIPT, WINDOW_KEY

from .constants import DECOY_SCRIPTS, REDIRECT_PREFIX, script_headers

log = structlog.get_logger(__name__)


def find_script_refs(html: str) -> list[str]:
    """List versioned script references as ``path.js?_=version``."""
    return [f"{path}?_={version}" for path, version in VERSIONED_SCRIPT.find_all(html)]


def select_script(
    refs: list[str],
    decoy_names: tuple[str, ...] = DECOY_SCRIPTS,
) -> str | None:
    """Pick the script that carries the key material.

    The last reference wins unless it is a decoy, in which case the one
    before it is used. Reverse-engineered from the live player; expect it to
    break when the site reshuffles its bundles.
    """
    if not refs:
        return None
    last = refs[-1]
    if any(decoy in last for decoy in decoy_names):
        return refs[-2] if len(refs) >= 2 else None
    return last


def extract_key_material(js: str) -> KeyMaterial | None:
    """Extract the key name and selector seed from the player script."""
    captured = WINDOW_KEY.search(js)
    if captured is None:
        return None
    key, seed = captured[0].strip(), captured[1].strip()
    if not key or not seed:
        return None
    return KeyMaterial(selector_seed=seed, cipher_key=key)


class ProrcpDecoder:
    """Turns a pro-redirect record into a stream URL."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        decryptor: DecryptorPort,
        *,
        redirect_prefix: str = REDIRECT_PREFIX,
        decoy_scripts: tuple[str, ...] = DECOY_SCRIPTS,
    ) -> None:
        self._http = http_client
        self._decryptor = decryptor
        self._prefix = redirect_prefix
        self._decoys = decoy_scripts

    async def _get_text(
        self,
        url: str,
        *,
        context: str,
        headers: dict[str, str] | None = None,
    ) -> str | None:
        try:
            resp = await self._http.get(url, headers=headers)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            log.warning(
                "prorcp_http_error",
                url=url,
                status=exc.response.status_code,
                context=context,
            )
            return None
        except httpx.HTTPError as exc:
            log.warning("prorcp_request_failed", url=url, error=str(exc), context=context)
            return None
        except httpx.InvalidURL as exc:
            log.warning("prorcp_invalid_url", url=url, error=str(exc), context=context)
            return None
        return resp.text

    async def fetch_key_material(
        self,
        context: ResolutionContext,
        page_html: str,
    ) -> KeyMaterial | None:
        """Locate, fetch and scan the player script of a prorcp page."""
        script = select_script(find_script_refs(page_html), self._decoys)
        if script is None:
            log.warning("prorcp_no_script")
            return None

        js = await self._get_text(
            f"{context.base_domain}/{script}",
            context="script",
            headers=script_headers(context.base_domain),
        )
        if js is None:
            return None

        material = extract_key_material(js)
        if material is None:
            log.warning("prorcp_no_key_material", script=script)
        return material

    async def _safe_decrypt(self, ciphertext: str, key: str, *, step: str) -> str | None:
        try:
            return await self._decryptor.decrypt(ciphertext, key)
        except Exception as exc:  # noqa: BLE001
            log.warning("prorcp_decrypt_error", step=step, error=str(exc))
            return None

    async def decode_page(
        self,
        context: ResolutionContext,
        page_html: str,
        document: HtmlDocumentPort | None = None,
    ) -> str | None:
        """Decode the stream URL embedded in an already fetched prorcp page."""
        material = await self.fetch_key_material(context, page_html)
        if material is None:
            return None

        element_id = await self._safe_decrypt(
            material.selector_seed, material.cipher_key, step="element_id"
        )
        if not element_id:
            return None

        doc = document if document is not None else SoupDocument(page_html)
        element = doc.select_first(id_selector(element_id))
        if element is None:
            log.warning("prorcp_payload_missing", element_id=element_id)
            return None

        stream = await self._safe_decrypt(
            doc.text(element), material.cipher_key, step="stream"
        )
        return stream or None

    async def decode(
        self,
        context: ResolutionContext,
        record: RedirectRecord,
    ) -> str | None:
        """Resolve one redirect record to its stream URL, or None."""
        if not record.is_pro_redirect(self._prefix):
            return None
        url = f"{context.base_domain}{self._prefix}{record.token(self._prefix)}"
        page = await self._get_text(url, context="page")
        if page is None:
            return None

        stream = await self.decode_page(context, page)
        if stream is None:
            log.info("prorcp_unresolved", url=url)
        else:
            log.debug("prorcp_resolved", url=url)
        return stream
