"""Runtime services shared by the margin components."""
