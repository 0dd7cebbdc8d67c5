from grab_fare.cli import main

main()
