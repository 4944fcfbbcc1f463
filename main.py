from campus_directory.cli import app


def main() -> None:
    app(prog_name="campus-directory")


if __name__ == "__main__":
    main()
