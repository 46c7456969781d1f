from bm.cli.app import main

main()
