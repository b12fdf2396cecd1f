from packed_dna.scripts.nuccount import main


if __name__ == '__main__':
    raise SystemExit(main())
