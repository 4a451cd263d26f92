import pytest

from roomcast.broadcaster import InMemoryBroadcaster
from roomcast.membership import RoomMembershipManager


@pytest.fixture()
def broadcaster() -> InMemoryBroadcaster:
    return InMemoryBroadcaster()


@pytest.fixture()
def membership(broadcaster: InMemoryBroadcaster) -> RoomMembershipManager:
    return RoomMembershipManager(broadcaster)
