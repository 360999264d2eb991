from dataclasses import dataclass

_HTML_WRAPPER = """
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <meta name="viewport" content="width=device-width, initial-scale=1.0">
    </head>
    <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
        {content}
        <hr style="border: none; border-top: 1px solid #ddd; margin: 30px 0;">
        <p style="font-size: 12px; color: #888; text-align: center;">{footer}</p>
    </body>
    </html>
    """


def _html(content: str, footer: str) -> str:
    return _HTML_WRAPPER.replace("{content}", content).replace("{footer}", footer)


@dataclass
class EmailTemplates:
    """Subjects and bodies of every email the app sends.

    Bodies are ``str.format`` templates. HTML templates expect their values
    to be escaped by the caller.
    """

    AUTOMATED_CONFIRMATION = "This is an automated confirmation email."
    AUTOMATED_NOTIFICATION = "This is an automated notification from your wedding RSVP system."

    CONFIRMATION_ATTENDING_SUBJECT = "Wedding RSVP Confirmation - We Can't Wait to See You! 🎉"
    CONFIRMATION_ATTENDING_TEXT = """
Dear {guest_name},

Thank you for confirming your attendance at our wedding!

Attending Guests:
{attending_guests}

Dietary Requirements:
{diet}

We're so excited to celebrate with you!

With love,
{couple_names}

---
This is an automated confirmation email.
"""
    CONFIRMATION_ATTENDING_HTML = _html(
        """
        <div style="text-align: center; margin-bottom: 30px;">
            <h1 style="color: #d4a373;">We Can't Wait to See You!</h1>
        </div>

        <p>Dear {guest_name},</p>

        <p>Thank you for confirming your attendance at our wedding!</p>

        <div style="background-color: #fefae0; padding: 20px; border-radius: 8px; margin: 20px 0;">
            <p><strong>Attending Guests:</strong> {attending_guests}</p>
            <p><strong>Dietary Requirements:</strong> {diet}</p>
        </div>

        <p>We're so excited to celebrate with you!</p>

        <p>With love,<br>{couple_names}</p>
        """,
        AUTOMATED_CONFIRMATION,
    )

    CONFIRMATION_DECLINED_SUBJECT = "Wedding RSVP Confirmation - We'll Miss You"
    CONFIRMATION_DECLINED_TEXT = """
Dear {guest_name},

Thank you for your RSVP response.

We're sorry you won't be able to join us for our wedding celebration. You'll be missed!

If your plans change, please don't hesitate to contact us.

With love,
{couple_names}

---
This is an automated confirmation email.
"""
    CONFIRMATION_DECLINED_HTML = _html(
        """
        <p>Dear {guest_name},</p>

        <p>Thank you for your RSVP response.</p>

        <p>We're sorry you won't be able to join us for our wedding celebration. You'll be missed!</p>

        <p>If your plans change, please don't hesitate to contact us.</p>

        <p>With love,<br>{couple_names}</p>
        """,
        AUTOMATED_CONFIRMATION,
    )

    UNLISTED_GUEST_SUBJECT = "⚠️ Unlisted Guest Attempt: {name}"
    UNLISTED_GUEST_TEXT = """
Hello,

Someone not on the guest list attempted to RSVP for your wedding.

Name Entered: {name}
Time: {attempted_at}
IP Address: {ip_address}
User Agent: {user_agent}

This person was not found in your guest list. You may want to:
1. Check if this is a misspelling of an existing guest
2. Add them to the guest list if they should be invited
3. Contact them directly if needed

---
This is an automated notification from your wedding RSVP system.
"""
    UNLISTED_GUEST_HTML = _html(
        """
        <p>Hello,</p>

        <p>Someone not on the guest list attempted to RSVP for your wedding.</p>

        <ul>
            <li><strong>Name Entered:</strong> {name}</li>
            <li><strong>Time:</strong> {attempted_at}</li>
            <li><strong>IP Address:</strong> {ip_address}</li>
            <li><strong>User Agent:</strong> {user_agent}</li>
        </ul>

        <p>This person was not found in your guest list. You may want to check for a
        misspelling, add them to the guest list, or contact them directly.</p>
        """,
        AUTOMATED_NOTIFICATION,
    )

    VERIFICATION_REQUEST_SUBJECT = "RSVP Needs Verification: {guest_name}"
    VERIFICATION_REQUEST_TEXT = """
Hello,

An RSVP was submitted with guests that are not on the guest list.

Name: {guest_name}
Email: {email}
Attending Guests: {attending_guests}
Not on the guest list: {unmatched_names}
Dietary Requirements: {diet}

The guest has not been sent a confirmation. To verify this RSVP and send
the confirmation, open:
{verify_url}

---
This is an automated notification from your wedding RSVP system.
"""
    VERIFICATION_REQUEST_HTML = _html(
        """
        <p>Hello,</p>

        <p>An RSVP was submitted with guests that are not on the guest list.</p>

        <ul>
            <li><strong>Name:</strong> {guest_name}</li>
            <li><strong>Email:</strong> {email}</li>
            <li><strong>Attending Guests:</strong> {attending_guests}</li>
            <li><strong>Not on the guest list:</strong> {unmatched_names}</li>
            <li><strong>Dietary Requirements:</strong> {diet}</li>
        </ul>

        <p>The guest has not been sent a confirmation.</p>

        <div style="text-align: center; margin: 30px 0;">
            <a href="{verify_url}" style="background-color: #d4a373; color: white; padding: 15px 30px; text-decoration: none; border-radius: 5px; font-size: 18px;">
                Verify RSVP
            </a>
        </div>

        <p style="word-break: break-all; color: #606c38;"><a href="{verify_url}">{verify_url}</a></p>
        """,
        AUTOMATED_NOTIFICATION,
    )
