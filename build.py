#!/usr/bin/env python3
from blogtools.cli import main

if __name__ == "__main__":
    main()
