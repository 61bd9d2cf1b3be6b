# main.py
import sys

from blockinsight.cli.cli import CLI

def main():
    # Default to serving the API when run without arguments
    args = sys.argv[1:] or ["serve"]
    sys.exit(CLI().main(args))

if __name__ == "__main__":
    main()
