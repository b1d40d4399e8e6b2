"""constants shared across CafeMol native-info and time-series files."""

CONSTANTS = {
    # Native contacts
    "contact_tolerance": 1.2,             # contact formed if r <= 1.2 * r_native
    "definition_of_contact_A": 6.50,      # cutoff reported in the contact block header

    # Time series (.ts)
    "time_series_header_lines": 9,
}
