"""Session store behaviour around in-flight assistant requests."""

from __future__ import annotations

import asyncio

import pytest

from resume_copilot.skills.quick_actions import SECTION_FLOWS
from resume_copilot.web.errors import APIError
from resume_copilot.web.store import InMemorySessionStore


class GatedChatProxy:
    def __init__(self, reply: str = "Happy to help.") -> None:
        self.reply = reply
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def complete(self, system, messages):
        self.started.set()
        await self.release.wait()
        return self.reply


@pytest.mark.asyncio
async def test_section_flow_during_send_is_rejected_and_state_stays_consistent():
    proxy = GatedChatProxy()
    store = InMemorySessionStore(proxy)
    session = await store.create_session()

    pending = asyncio.create_task(store.send_message(session.session_id, "hello"))
    await proxy.started.wait()

    with pytest.raises(APIError) as exc_info:
        await store.run_action(session.session_id, "add-summary")
    assert exc_info.value.status_code == 409
    assert exc_info.value.code == "CONVERSATION_BUSY"

    proxy.release.set()
    await pending

    assert session.awaiting_details is None
    assert [m.content for m in session.history[-2:]] == ["hello", "Happy to help."]

    # Once the send has settled the flow can start and sticks.
    await store.run_action(session.session_id, "add-summary")
    assert session.awaiting_details == "add-summary"
    assert session.history[-1].content == SECTION_FLOWS["add-summary"].question
