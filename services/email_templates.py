"""Fixed notification texts sent on application status changes."""

SIGNATURE = "\n\nSincerely,\nThe PolloPollo Project"


def donation_notice(product_title, pickup_address):
    subject = "You received a donation on PolloPollo!"
    body = (
        "Congratulations!\n\n"
        f"A donation has just been made to fill your application for {product_title}. "
        f"You can now go and receive the product at the shop with address: {pickup_address}. "
        "You must confirm reception of the product when you get there.\n\n"
        "Follow these steps to confirm reception:\n"
        "-Log on to pollopollo.org\n"
        "-Click on your user and select \"profile\"\n"
        "-Change \"Open applications\" to \"Pending applications\"\n"
        "-Click on \"Confirm Receival\"\n\n"
        "After 10-15 minutes, the confirmation goes through and the shop will be notified of your confirmation.\n\n"
        "If you have questions or experience problems, please join https://discord.pollopollo.org "
        "or write an email to pollopollo@pollopollo.org"
        + SIGNATURE
    )
    return subject, body


def receiver_thank_you():
    subject = "Thank you for using PolloPollo"
    body = (
        "Thank you very much for using PolloPollo.\n\n"
        "If you have suggestions for improvements or feedback, please join our Discord server: "
        "https://discord.pollopollo.org and let us know.\n\n"
        "The PolloPollo project is created and maintained by volunteers. "
        "We rely solely on the help of volunteers to grow the platform.\n\n"
        "You can help us help more people by asking shops to join and add products that people in need can apply for."
        "\n\nWe hope you enjoyed using PolloPollo"
        + SIGNATURE
    )
    return subject, body


def producer_donation_summary(receiver_name, application_id, product_title, product_price,
                              amount_bytes, usd_value, shared_address):
    subject = f"{receiver_name} confirmed receipt of application #{application_id}"
    body = (
        f"{receiver_name} has just confirmed receipt of the product {product_title} (${product_price}).\n\n"
        f"The application ID is #{application_id} and contains {amount_bytes} bytes "
        f"which is roughly ${usd_value:.2f} at current rates.\n\n"
        "To withdraw the money, open your Obyte Wallet and find the Smart Wallet address "
        f"starting with {shared_address or ''}.\n\n"
        "Thank you for using PolloPollo and if you have suggestions for improvements, please join our Discord server: "
        "https://discord.pollopollo.org and let us know.\n\n"
        "The PolloPollo project is created and maintained by volunteers. "
        "We rely solely on the help of volunteers to grow the platform.\n\n"
        "You can help us help more people by adding more products or encouraging other shops to join "
        "and add their products that people in need can apply for."
        "\n\nWe hope you enjoyed using PolloPollo."
        + SIGNATURE
    )
    return subject, body
