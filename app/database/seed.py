# app/database/seed.py
# Dati iniziali usati al primo avvio (chiave assente o illeggibile nel backing store).
from datetime import datetime
from typing import List

from app.schemas.assignment import Assignment
from app.schemas.submission import AssignmentSnapshot, StudentSnapshot, Submission

_JOHN = StudentSnapshot(name="John Student", email="student@example.com")


def seed_assignments() -> List[Assignment]:
    return [
        Assignment(
            id="1",
            title="React Components Project",
            description="Create a comprehensive React application showcasing different component patterns "
                        "including functional components, hooks, and state management. Build a small "
                        "e-commerce product catalog with filtering and search functionality.",
            deadline=datetime(2024, 2, 15, 23, 59, 59),
            instructorId="1",
        ),
        Assignment(
            id="2",
            title="Database Design Assignment",
            description="Design and implement a relational database schema for a library management system. "
                        "Include proper normalization, foreign key relationships, and create sample queries "
                        "for common operations.",
            deadline=datetime(2024, 2, 20, 23, 59, 59),
            instructorId="1",
        ),
        Assignment(
            id="3",
            title="API Integration Task",
            description="Build a web application that integrates with a public REST API (such as "
                        "OpenWeatherMap or JSONPlaceholder). Implement proper error handling, loading "
                        "states, and responsive design.",
            deadline=datetime(2024, 2, 25, 23, 59, 59),
            instructorId="1",
        ),
        Assignment(
            id="4",
            title="CSS Grid Layout Challenge",
            description="Create a responsive webpage layout using CSS Grid and Flexbox. The layout should "
                        "adapt to different screen sizes and include a header, sidebar, main content area, "
                        "and footer.",
            deadline=datetime(2024, 2, 18, 23, 59, 59),
            instructorId="1",
        ),
        Assignment(
            id="5",
            title="JavaScript Algorithms Practice",
            description="Solve a series of algorithm problems including array manipulation, string "
                        "processing, and data structure operations. Focus on time complexity optimization.",
            deadline=datetime(2024, 2, 12, 23, 59, 59),
            instructorId="1",
        ),
    ]


def seed_submissions() -> List[Submission]:
    return [
        Submission(
            id="1",
            assignmentId="1",
            studentId="2",
            submissionUrl="https://github.com/student/react-components-project",
            note="Implemented all required features including search, filtering, and responsive design. "
                 "Added some extra animations for better UX.",
            feedback="Excellent work! Your component structure is clean and the state management is well "
                     "implemented. Great attention to detail with the animations.",
            status="accepted",
            submittedAt=datetime(2024, 2, 10, 14, 30),
            student=_JOHN,
            assignment=AssignmentSnapshot(title="React Components Project"),
        ),
        Submission(
            id="2",
            assignmentId="4",
            studentId="2",
            submissionUrl="https://codepen.io/student/css-grid-layout",
            note="Created a responsive layout that works on mobile, tablet, and desktop. "
                 "Used CSS Grid for the main layout and Flexbox for components.",
            feedback="Good responsive implementation. Consider using CSS custom properties for better maintainability.",
            status="accepted",
            submittedAt=datetime(2024, 2, 8, 16, 45),
            student=_JOHN,
            assignment=AssignmentSnapshot(title="CSS Grid Layout Challenge"),
        ),
        Submission(
            id="3",
            assignmentId="5",
            studentId="2",
            submissionUrl="https://github.com/student/js-algorithms",
            note="Solved all problems with optimal time complexity. "
                 "Included detailed comments explaining the approach.",
            feedback="The solutions are correct but some could be optimized further. Review the sorting algorithms section.",
            status="rejected",
            submittedAt=datetime(2024, 2, 5, 9, 15),
            student=_JOHN,
            assignment=AssignmentSnapshot(title="JavaScript Algorithms Practice"),
        ),
        Submission(
            id="4",
            assignmentId="2",
            studentId="3",
            submissionUrl="https://github.com/alice/library-db-design",
            note="Complete database schema with normalization up to 3NF. Included sample data and queries.",
            status="pending",
            submittedAt=datetime(2024, 2, 11, 11, 20),
            student=StudentSnapshot(name="Alice Johnson", email="alice@example.com"),
            assignment=AssignmentSnapshot(title="Database Design Assignment"),
        ),
        Submission(
            id="5",
            assignmentId="1",
            studentId="4",
            submissionUrl="https://github.com/bob/react-ecommerce",
            note="Built the e-commerce catalog with Redux for state management. Added unit tests for components.",
            status="pending",
            submittedAt=datetime(2024, 2, 12, 8, 30),
            student=StudentSnapshot(name="Bob Wilson", email="bob@example.com"),
            assignment=AssignmentSnapshot(title="React Components Project"),
        ),
        Submission(
            id="6",
            assignmentId="3",
            studentId="5",
            submissionUrl="https://weather-app-demo.netlify.app",
            note="Weather app using OpenWeatherMap API. Includes location detection and 5-day forecast.",
            feedback="Great API integration! The error handling is robust and the UI is intuitive.",
            status="accepted",
            submittedAt=datetime(2024, 2, 9, 13, 45),
            student=StudentSnapshot(name="Emma Davis", email="emma@example.com"),
            assignment=AssignmentSnapshot(title="API Integration Task"),
        ),
    ]
