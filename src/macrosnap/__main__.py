from macrosnap.cli import main

main()
