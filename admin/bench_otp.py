"""
helper script to benchmark otp code computation per hash mode & key provider
"""

import sys
from timeit import Timer


# =============================================================================
# main
# =============================================================================
def main():
    # --------------------------------------------------------------
    # config
    # --------------------------------------------------------------
    bestof = 3
    number = 2000

    modes = ["SHA1", "SHA256", "SHA512"]

    # --------------------------------------------------------------
    # formatting
    # --------------------------------------------------------------
    header = "{0:22s} {1:1s}"
    cell = "{0:>10s} "
    num_cell = "{0:>10d} "
    div = "-" * (len(cell.format("")) - 1) + " "

    print(header.format("(codes/ms)", "") + "".join(cell.format(mode) for mode in modes))
    print(header.format("", "") + div * len(modes))

    # --------------------------------------------------------------
    # harness
    # --------------------------------------------------------------
    def timeit(stmt, setup):
        return min(Timer(stmt, setup).repeat(bestof, number)) / number

    def benchmark(name, setup, stmt):
        print(header.format(name, "|"), end="")
        sys.stdout.flush()
        for mode in modes:
            mode_setup = setup.format(mode=mode)
            codes_per_sec = 1 / timeit(stmt, mode_setup)
            print(num_cell.format(int(codes_per_sec / 1000)), end="")
            sys.stdout.flush()
        print()

    base_setup = (
        "from libotp import HashMode, Hotp, Totp, InMemoryKey, ProtectedKey, random_key\n"
        "mode = HashMode.{mode}\n"
        "key = random_key(mode)\n"
    )

    # --------------------------------------------------------------
    # key providers
    # --------------------------------------------------------------
    benchmark(
        "InMemoryKey.hmac",
        base_setup + "provider = InMemoryKey(key)",
        "provider.hmac(mode, b'\\x00' * 8)",
    )
    benchmark(
        "ProtectedKey.hmac",
        base_setup + "provider = ProtectedKey(key)",
        "provider.hmac(mode, b'\\x00' * 8)",
    )

    # --------------------------------------------------------------
    # generators
    # --------------------------------------------------------------
    benchmark(
        "Hotp.compute",
        base_setup + "otp = Hotp(key, mode)",
        "otp.compute(12345)",
    )
    benchmark(
        "Totp.compute",
        base_setup + "otp = Totp(key, mode=mode, digit_count=8)",
        "otp.compute(1234567890)",
    )
    benchmark(
        "Totp.verify (1/1 miss)",
        base_setup
        + "from libotp import RFC_NETWORK_DELAY\n"
        + "otp = Totp(key, mode=mode)",
        "otp.verify('abcdef', 1234567890, RFC_NETWORK_DELAY)",
    )


if __name__ == "__main__":
    sys.exit(main())

# =============================================================================
# eoc
# =============================================================================
