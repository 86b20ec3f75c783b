"""Knowledge-base article search and view tracking."""
