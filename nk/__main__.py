from nk.cli.app import main

main()
