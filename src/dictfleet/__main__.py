from dictfleet.cli.main import main

main()
