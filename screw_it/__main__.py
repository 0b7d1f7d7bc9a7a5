from screw_it.cli.app import main

main()
