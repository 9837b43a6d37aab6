"""Tests for per-channel notification state."""

import pytest

from upower_notify.engine.channel_state import ChannelState


class TestChannelState:
    @pytest.mark.asyncio
    async def test_close_active_on_empty_slot(self):
        state = ChannelState("state")
        await state.close_active()
        assert state.active_handle is None

    @pytest.mark.asyncio
    async def test_close_active_closes_and_clears(self, transport):
        state = ChannelState("state")
        handle = await transport.show("one", "")
        state.replace(handle)

        await state.close_active()

        assert handle.closed
        assert state.active_handle is None

    @pytest.mark.asyncio
    async def test_replace_refuses_to_overwrite_open_handle(self, transport):
        state = ChannelState("state")
        state.replace(await transport.show("one", ""))
        with pytest.raises(RuntimeError):
            state.replace(await transport.show("two", ""))
