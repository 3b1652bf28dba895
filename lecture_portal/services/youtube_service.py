import logging

import aiohttp
from fastapi import HTTPException

from ..schemas import VideoInfo
from .lecture_views import embed_url

logger = logging.getLogger(__name__)

OEMBED_URL = "https://www.youtube.com/oembed"


async def fetch_video_info(youtube_id: str) -> VideoInfo:
    """
    Look up title and thumbnail of a lecture video through YouTube oEmbed.
    """
    params = {"url": f"https://www.youtube.com/watch?v={youtube_id}", "format": "json"}
    timeout = aiohttp.ClientTimeout(total=10)
    try:
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(OEMBED_URL, params=params) as resp:
                if resp.status != 200:
                    text = await resp.text()
                    logger.warning("oEmbed lookup for %s failed: %s %s", youtube_id, resp.status, text[:200])
                    raise HTTPException(
                        status_code=502,
                        detail=f"YouTube lookup failed: {resp.status}",
                    )
                data = await resp.json(content_type=None)
    except aiohttp.ClientError as e:
        logger.warning("oEmbed lookup for %s failed: %s", youtube_id, e)
        raise HTTPException(status_code=502, detail="YouTube lookup failed")

    return VideoInfo(
        youtube_id=youtube_id,
        embed_url=embed_url(youtube_id),
        title=data.get("title"),
        author_name=data.get("author_name"),
        thumbnail_url=data.get("thumbnail_url"),
    )
