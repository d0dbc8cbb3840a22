import pytest
from structlog.testing import capture_logs

from bincodec import Config, SizeLimitExceededError, TrailingBytesError, decode, encode


def test_rare_events_are_logged() -> None:
    with capture_logs() as logs:
        with pytest.raises(TrailingBytesError):
            decode(b'\x01\x02', bool)
        with pytest.raises(SizeLimitExceededError):
            encode('abcdef', Config().with_limit(4))
    events = [log['event'] for log in logs]
    assert 'trailing bytes rejected' in events
    assert 'size limit exceeded on write' in events
