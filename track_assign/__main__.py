from .run_assignment import main

main()
