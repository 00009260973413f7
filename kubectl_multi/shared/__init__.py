"""Discovery, dispatch and reporting shared by every command family."""
