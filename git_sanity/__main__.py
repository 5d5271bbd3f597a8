from git_sanity.cli import main

main()
