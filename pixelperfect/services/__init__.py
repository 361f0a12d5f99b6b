"""External collaborators: payment gateway and notifications."""
