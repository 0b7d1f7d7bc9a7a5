from __future__ import annotations

from screw_it.core.result import Err, Ok
from screw_it.npm.client import NpmClient
from screw_it.services.release.model import ReleaseContext
from screw_it.services.release.publish import publish_package
from screw_it.test.fakes import FakeInteraction, FakeRunner, fail

_PUBLISH = ["npm", "publish"]
_PUBLISH_OTP = ["npm", "publish", "--otp", "123456"]
_REVERT = ["npm", "version", "0.1.0", "--no-git-tag-version", "--allow-same-version"]
_EOTP = "npm error code EOTP\nnpm error This operation requires a one-time passcode."


def _ctx() -> ReleaseContext:
    return ReleaseContext().with_current_version("0.1.0").with_new_version("0.2.0")


def test_publish_success() -> None:
    runner = FakeRunner()
    ui = FakeInteraction()

    result = publish_package(_ctx(), npm=NpmClient(runner), ui=ui)

    assert result == Ok(_ctx())
    assert runner.calls == [_PUBLISH]
    assert ui.otp_asked == 0


def test_otp_retry_success_does_not_revert() -> None:
    runner = FakeRunner().on(_PUBLISH, fail(_PUBLISH, stderr=_EOTP))
    ui = FakeInteraction(otp="123456")

    result = publish_package(_ctx(), npm=NpmClient(runner), ui=ui)

    assert isinstance(result, Ok)
    assert ui.otp_asked == 1
    assert runner.calls == [_PUBLISH, _PUBLISH_OTP]
    assert not runner.ran(_REVERT)


def test_otp_retry_failure_reverts() -> None:
    runner = (
        FakeRunner()
        .on(_PUBLISH, fail(_PUBLISH, stderr=_EOTP))
        .on(_PUBLISH_OTP, fail(_PUBLISH_OTP, stderr="npm error code E401 invalid OTP"))
    )

    result = publish_package(_ctx(), npm=NpmClient(runner), ui=FakeInteraction(otp="123456"))

    assert isinstance(result, Err)
    assert result.error.kind == "publish"
    assert result.error.message == "Failed to publish after OTP: npm error code E401 invalid OTP"
    assert result.error.hint is None
    assert runner.calls == [_PUBLISH, _PUBLISH_OTP, _REVERT]


def test_empty_otp_reverts_without_retry() -> None:
    runner = FakeRunner().on(_PUBLISH, fail(_PUBLISH, stderr=_EOTP))

    result = publish_package(_ctx(), npm=NpmClient(runner), ui=FakeInteraction(otp=None))

    assert isinstance(result, Err)
    assert result.error.kind == "publish"
    assert result.error.message.startswith("Failed to publish after OTP")
    assert runner.calls == [_PUBLISH, _REVERT]


def test_non_otp_failure_reverts() -> None:
    runner = FakeRunner().on(_PUBLISH, fail(_PUBLISH, stderr="npm error code E403 forbidden"))
    ui = FakeInteraction(otp="123456")

    result = publish_package(_ctx(), npm=NpmClient(runner), ui=ui)

    assert isinstance(result, Err)
    assert result.error.kind == "publish"
    assert result.error.message == "Failed to publish: npm error code E403 forbidden"
    assert ui.otp_asked == 0
    assert runner.calls == [_PUBLISH, _REVERT]


def test_failed_revert_is_mentioned() -> None:
    runner = (
        FakeRunner()
        .on(_PUBLISH, fail(_PUBLISH, stderr="npm error code E403"))
        .on(_REVERT, fail(_REVERT, stderr="npm error EACCES"))
    )

    result = publish_package(_ctx(), npm=NpmClient(runner), ui=FakeInteraction())

    assert isinstance(result, Err)
    assert result.error.kind == "publish"
    assert result.error.hint is not None
    assert "0.1.0" in result.error.hint
