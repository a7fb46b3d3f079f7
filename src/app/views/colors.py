# Define a static color class for consistent use across the app


class Colors:
    blue = "#2563eb"  # Royal Blue, price line
    green = "#059669"  # Emerald 600, gain
    red = "#dc2626"  # Red 600, loss or provider error
