"""
Seat Selection

Client-side seat allocation and reservation holding
Responsibilities:
- Fast (best block) and manual seat picking
- Time-boxed holds with a cancellable countdown
- Reconciling the tentative pick against server seat status before checkout
"""
