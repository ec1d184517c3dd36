from dataclasses import dataclass


@dataclass
class EmailTemplates:
    INVITATION_SUBJECT = "You're invited to {event_title}!"
    INVITATION_HTML = """
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <meta name="viewport" content="width=device-width, initial-scale=1.0">
    </head>
    <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
        <div style="text-align: center; margin-bottom: 30px;">
            <h1 style="color: #5b4b8a;">You're Invited!</h1>
        </div>

        <p>Dear {guest_name},</p>

        <p><strong>{host_name}</strong> has invited you to attend <strong>{event_title}</strong>.</p>

        <div style="background-color: #f3f0fa; padding: 20px; border-radius: 8px; margin: 20px 0;">
            <h2 style="color: #5b4b8a; margin-top: 0;">Event Details</h2>
            <p><strong>Date:</strong> {event_date}</p>
            <p><strong>Location:</strong> {event_location}</p>
        </div>

        <p>Please click the button below to view the full invitation and RSVP to this event.</p>

        <div style="text-align: center; margin: 30px 0;">
            <a href="{invitation_url}" style="background-color: #5b4b8a; color: white; padding: 15px 30px; text-decoration: none; border-radius: 5px; font-size: 18px;">
                View Invitation &amp; RSVP
            </a>
        </div>

        <p>If the button doesn't work, you can copy and paste the following link into your browser:</p>
        <p style="word-break: break-all;"><a href="{invitation_url}">{invitation_url}</a></p>
    </body>
    </html>
    """

    INVITATION_TEXT = """
    Dear {guest_name},

    {host_name} has invited you to attend {event_title}.

    Date: {event_date}
    Location: {event_location}

    View the full invitation and RSVP here:
    {invitation_url}
    """

    VERIFICATION_SUBJECT = "Account Activation"
    VERIFICATION_HTML = """
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
    </head>
    <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
        <h1 style="color: #5b4b8a;">Hello, {user_name}</h1>

        <p>Click the link below to verify your email address and activate your account.</p>

        <div style="text-align: center; margin: 30px 0;">
            <a href="{verification_url}" style="background-color: #5b4b8a; color: white; padding: 15px 30px; text-decoration: none; border-radius: 5px;">
                Activate account
            </a>
        </div>

        <p style="font-size: 12px; color: #888;">
            This link is valid for 1 hour. If you did not request this email you can safely ignore it.
        </p>
    </body>
    </html>
    """

    VERIFICATION_TEXT = """
    Hello, {user_name}

    Open the link below to verify your email address and activate your account:
    {verification_url}

    This link is valid for 1 hour. If you did not request this email you can safely ignore it.
    """

    CONTACT_SUBJECT = "[Contact] {subject}"
    CONTACT_HTML = """
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
    </head>
    <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
        <h1 style="color: #5b4b8a;">New Contact Form Submission</h1>
        <p style="color: #888;">Type: {inquiry_type}</p>

        <p><strong>Name:</strong> {sender_name}<br/>
        <strong>Email:</strong> {sender_email}<br/>
        <strong>Subject:</strong> {subject}</p>

        <p><strong>Message:</strong><br/>{message_html}</p>
    </body>
    </html>
    """

    CONTACT_TEXT = """
    Name: {sender_name}
    Email: {sender_email}
    Type: {inquiry_type}
    Subject: {subject}
    Message:
    {message}
    """
