"""Front-ends that turn other input formats into chapter markup."""
