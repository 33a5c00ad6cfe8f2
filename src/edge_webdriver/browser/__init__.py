"""Driver server process management and the Edge WebDriver client."""
