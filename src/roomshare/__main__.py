from roomshare.app import main

main()
