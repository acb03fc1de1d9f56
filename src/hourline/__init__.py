# SPDX-License-Identifier: MIT

from hourline.terminal.app import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
