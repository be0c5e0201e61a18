from pytest_archon import archrule


def test_core_does_not_import_url_or_network_modules() -> None:
    (
        archrule("otp-core-independent")
        .match("libotp.*")
        .exclude("libotp.keyurl")
        .exclude("libotp.timesync")
        .should_not_import("libotp.keyurl")
        .should_not_import("libotp.timesync")
        .check("libotp", only_direct_imports=True)
    )


def test_only_protected_key_uses_cryptography() -> None:
    (
        archrule("cryptography-confined")
        .match("libotp*")
        .exclude("libotp.keys.protected")
        .should_not_import("cryptography*")
        .check("libotp", only_direct_imports=True)
    )


def test_does_not_import_network_libraries_outside_timesync() -> None:
    (
        archrule("network-confined")
        .match("libotp*")
        .exclude("libotp.timesync")
        .should_not_import("socket")
        .should_not_import("urllib.request")
        .check("libotp", only_direct_imports=True)
    )
