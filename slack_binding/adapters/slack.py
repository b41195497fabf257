"""
Slack Web API adapter for workflow send/receive calls.

Every failure is returned as an error descriptor ({"error": "..."}) instead of
being raised, so workflow callers only need to branch on the "error" key.
"""

import asyncio
from typing import Any, Awaitable, Callable, Dict, Optional, Union

import httpx
import structlog

from slack_binding.adapters.integration import SettingLookup
from slack_binding.config.settings import settings

logger = structlog.get_logger()

# Fixed pause before polling a thread for replies. Not configurable.
REPLY_WAIT_SECONDS = 10

NO_RESPONSE = "no response"

ErrorDescriptor = Dict[str, str]
SendResult = Union[str, ErrorDescriptor]
ReceiveResult = Union[str, ErrorDescriptor]


def is_error(result: Any) -> bool:
    """Check whether a send/receive result is an error descriptor"""
    return isinstance(result, dict) and "error" in result


class SlackAdapter:
    """
    Posts messages to Slack and polls a thread once for a reply.
    Credentials and channel come from the SettingLookup on every call.
    """

    def __init__(
        self,
        lookup: SettingLookup,
        base_url: str = None,
        timeout: float = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.lookup = lookup
        self.base_url = (base_url or settings.slack_base_url).rstrip("/")
        self.timeout = timeout or settings.http_timeout_seconds
        self._transport = transport
        self._sleep = sleep

    def get_url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint}"

    def standard_headers(self) -> dict:
        """
        Build request headers.
        A missing API key is logged but does not block the request.
        """
        api_key = self.lookup.api_key()
        if not api_key:
            logger.error("slack_api_key_missing", message="Slack API key not configured")
            return {"Content-Type": "application/json"}

        return {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    async def request(self, method: str, url: str, **kwargs) -> Any:
        """
        Issue a single HTTP request and return the decoded JSON body.

        Returns:
            The response body, or an error descriptor
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.request(method, url, **kwargs)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            return {
                "error": f"HTTP error! status: {e.response.status_code} {e.response.reason_phrase}"
            }
        except (httpx.UnsupportedProtocol, httpx.LocalProtocolError) as e:
            return {"error": str(e)}
        except httpx.TransportError as e:
            logger.debug("slack_no_response", url=url, error=str(e))
            return {"error": "No response received from server"}
        except Exception as e:
            return {"error": str(e)}

        if not isinstance(data, dict):
            return {"error": f"Unexpected response body: {type(data).__name__}"}

        return data

    async def send(self, channel: str, message: str) -> SendResult:
        """
        Post a message to the configured Slack channel.

        Args:
            channel: Accepted for the workflow signature but not used; the
                target is always the configured channel
            message: Message text

        Returns:
            The message timestamp token, or an error descriptor
        """
        slack_channel = self.lookup.channel()

        if not slack_channel:
            return {"error": "Slack channel not configured"}

        if channel and channel != slack_channel:
            logger.debug("slack_channel_argument_ignored", requested=channel, configured=slack_channel)

        message_body = {
            "channel": slack_channel,
            "text": message,
        }

        result = await self.request(
            "POST",
            self.get_url("chat.postMessage"),
            headers=self.standard_headers(),
            json=message_body,
        )

        if is_error(result):
            logger.error("slack_send_failed", channel=slack_channel, error=result["error"])
            return result

        logger.info("slack_message_sent", channel=slack_channel, ts=result.get("ts"))
        return result.get("ts")

    async def receive(self, thread_id: str) -> ReceiveResult:
        """Wait for and retrieve the latest reply in a thread"""
        return await self.wait_for_reply(thread_id)

    async def wait_for_reply(self, thread: str) -> ReceiveResult:
        """
        Pause for REPLY_WAIT_SECONDS, then fetch the thread once.

        Returns:
            Text of the last message when the thread has at least one reply,
            "no response" otherwise, or an error descriptor
        """
        channel = self.lookup.channel()
        if not channel:
            return {"error": "Channel not configured"}

        logger.info("slack_waiting_for_reply", thread=thread, wait_seconds=REPLY_WAIT_SECONDS)
        await self._sleep(REPLY_WAIT_SECONDS)

        resp = await self.request(
            "GET",
            self.get_url("conversations.replies"),
            params={"ts": thread, "channel": channel},
            headers=self.standard_headers(),
        )

        if is_error(resp):
            return resp

        msgs = resp.get("messages")
        if not isinstance(msgs, list) or len(msgs) < 2:
            return NO_RESPONSE

        last = msgs[-1]
        if not isinstance(last, dict):
            return {"error": f"Unexpected response body: message is {type(last).__name__}"}

        return last.get("text")
