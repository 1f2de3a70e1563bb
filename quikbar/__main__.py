from quikbar.cli import main

main()
